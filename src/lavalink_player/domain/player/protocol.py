"""Wire models for the node's websocket protocol.

Outgoing commands are built as frozen models and serialized with
:meth:`PlayerCommand.to_payload`. Incoming frames are parsed with
:func:`parse_event` and :func:`parse_player_update`.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from lavalink_player.domain.player.filters import Filters
from lavalink_player.domain.player.value_objects import (
    EventType,
    ExceptionSeverity,
    NodeOp,
    PlayerOp,
    TrackEndReason,
)
from lavalink_player.domain.shared.datetime_utils import from_unix_millis
from lavalink_player.domain.shared.types import (
    GuildIdStr,
    NodeVolume,
    NonEmptyStr,
    NonNegativeInt,
    PositionMs,
    TrackHandle,
)


class WireModel(BaseModel):
    """Base for protocol models: immutable, camelCase on the wire."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# === Voice ===


class VoiceServerUpdate(BaseModel):
    """Discord's VOICE_SERVER_UPDATE payload, forwarded untouched (snake_case keys)."""

    model_config = ConfigDict(frozen=True, extra="allow")

    token: NonEmptyStr
    guild_id: GuildIdStr
    endpoint: str | None = None


class VoiceUpdateState(WireModel):
    """Credentials the node needs to join a voice server for a guild."""

    session_id: NonEmptyStr
    event: VoiceServerUpdate


class JoinOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    self_mute: bool = False
    self_deaf: bool = False


# === Outgoing commands ===


class PlayerCommand(WireModel):
    """A single op sent to the node on behalf of one guild."""

    op: PlayerOp
    guild_id: GuildIdStr

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PlayCommand(PlayerCommand):
    op: Literal[PlayerOp.PLAY] = PlayerOp.PLAY
    track: TrackHandle
    start_time: PositionMs | None = None
    end_time: PositionMs | None = None
    no_replace: bool | None = None
    pause: bool | None = None
    volume: NodeVolume | None = None


class PauseCommand(PlayerCommand):
    op: Literal[PlayerOp.PAUSE] = PlayerOp.PAUSE
    pause: bool


class SeekCommand(PlayerCommand):
    op: Literal[PlayerOp.SEEK] = PlayerOp.SEEK
    position: PositionMs


class VolumeCommand(PlayerCommand):
    op: Literal[PlayerOp.VOLUME] = PlayerOp.VOLUME
    volume: NodeVolume


class FiltersCommand(PlayerCommand):
    """Filters travel flattened next to ``op`` and ``guildId``."""

    op: Literal[PlayerOp.FILTERS] = PlayerOp.FILTERS
    filters: Filters

    def to_payload(self) -> dict[str, Any]:
        return {**self.filters.to_payload(), "op": self.op.value, "guildId": self.guild_id}


class VoiceUpdateCommand(PlayerCommand):
    op: Literal[PlayerOp.VOICE_UPDATE] = PlayerOp.VOICE_UPDATE
    session_id: NonEmptyStr
    event: VoiceServerUpdate


# === Incoming events ===


class PlayerEvent(WireModel):
    """Base of the node's tagged event union. Unknown keys are kept."""

    model_config = ConfigDict(extra="allow")

    op: str = NodeOp.EVENT.value
    type: str
    guild_id: GuildIdStr | None = None


class TrackStartEvent(PlayerEvent):
    type: Literal["TrackStartEvent"] = "TrackStartEvent"
    track: TrackHandle | None = None


class TrackEndEvent(PlayerEvent):
    type: Literal["TrackEndEvent"] = "TrackEndEvent"
    track: TrackHandle | None = None
    reason: str = TrackEndReason.FINISHED.value

    @property
    def is_replaced(self) -> bool:
        return self.reason == TrackEndReason.REPLACED


class TrackException(WireModel):
    message: str | None = None
    severity: ExceptionSeverity | None = None
    cause: str | None = None


class TrackExceptionEvent(PlayerEvent):
    type: Literal["TrackExceptionEvent"] = "TrackExceptionEvent"
    track: TrackHandle | None = None
    exception: TrackException | None = None
    # Nodes older than 3.4 send a bare string instead of ``exception``.
    error: str | None = None


class TrackStuckEvent(PlayerEvent):
    type: Literal["TrackStuckEvent"] = "TrackStuckEvent"
    track: TrackHandle | None = None
    threshold_ms: NonNegativeInt | None = None


class WebSocketClosedEvent(PlayerEvent):
    type: Literal["WebSocketClosedEvent"] = "WebSocketClosedEvent"
    code: int | None = None
    reason: str | None = None
    by_remote: bool | None = None


class UnknownEvent(PlayerEvent):
    """Any event whose tag this client does not know."""

    type: str | None = None


_EVENT_MODELS: dict[str, type[PlayerEvent]] = {
    EventType.TRACK_START: TrackStartEvent,
    EventType.TRACK_END: TrackEndEvent,
    EventType.TRACK_EXCEPTION: TrackExceptionEvent,
    EventType.TRACK_STUCK: TrackStuckEvent,
    EventType.WEBSOCKET_CLOSED: WebSocketClosedEvent,
}


def parse_event(data: Mapping[str, Any] | PlayerEvent) -> PlayerEvent:
    """Parse a raw event frame into its typed model, falling back to UnknownEvent."""
    if isinstance(data, PlayerEvent):
        return data
    model = _EVENT_MODELS.get(str(data.get("type")), UnknownEvent)
    return model.model_validate(data)


# === Incoming state snapshot ===


class PlayerState(WireModel):
    """Node-reported player state. Every field is optional so partial reports merge cleanly."""

    time: NonNegativeInt | None = None
    position: NonNegativeInt | None = None
    connected: bool | None = None
    ping: int | None = None
    filters: Filters | None = None

    @property
    def reported_at(self) -> datetime | None:
        """The node's clock at the time of the report."""
        if self.time is None:
            return None
        return from_unix_millis(self.time)

    def merge(self, other: PlayerState) -> PlayerState:
        """Overlay the fields *other* actually reported onto this snapshot.

        Reported filters are only ever replaced; a null ``filters`` keeps the previous ones.
        """
        update = {name: getattr(other, name) for name in other.model_fields_set}
        if "filters" in update and update["filters"] is None:
            del update["filters"]
        return self.model_copy(update=update)


class PlayerUpdate(WireModel):
    op: str = NodeOp.PLAYER_UPDATE.value
    guild_id: GuildIdStr | None = None
    state: PlayerState


def parse_player_update(data: Mapping[str, Any] | PlayerUpdate | PlayerState) -> PlayerState:
    """Extract the state snapshot from a ``playerUpdate`` frame."""
    if isinstance(data, PlayerState):
        return data
    if isinstance(data, PlayerUpdate):
        return data.state
    return PlayerUpdate.model_validate(data).state
