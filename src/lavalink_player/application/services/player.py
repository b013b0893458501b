"""Player - the per-guild proxy between callers and a node's player.

Commands are sent through the bound :class:`NodeTransport` and, once the
node acknowledges them, mirrored into local state. Frames the node sends
back for this guild are fed to :meth:`Player.handle_event` and
:meth:`Player.handle_state_update`, which update the same state and republish
typed notifications through :class:`PlayerNotifier`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Iterable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ...config.settings import PlayerSettings
from ...domain.player.filters import EqualizerBand, Filters
from ...domain.player.notifications import (
    FiltersChanged,
    PauseChanged,
    PlayerErrored,
    PlayerNotification,
    PlayerNotifier,
    PlayerWarning,
    Seeked,
    StateUpdated,
    TrackEnded,
    TrackStarted,
    VolumeChanged,
)
from ...domain.player.protocol import (
    FiltersCommand,
    JoinOptions,
    PauseCommand,
    PlayCommand,
    PlayerCommand,
    PlayerEvent,
    PlayerState,
    PlayerUpdate,
    SeekCommand,
    TrackEndEvent,
    TrackExceptionEvent,
    TrackStartEvent,
    TrackStuckEvent,
    VoiceUpdateCommand,
    VoiceUpdateState,
    VolumeCommand,
    WebSocketClosedEvent,
    parse_event,
    parse_player_update,
)
from ...domain.player.value_objects import NodeOp, PlayerOp
from ...domain.shared.datetime_utils import utcnow
from ...domain.shared.exceptions import NotConnectedError, ValidationError
from ...domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ..interfaces.session_registry import SessionRegistry
    from ..interfaces.transport import NodeTransport

logger = logging.getLogger(__name__)


class Player:
    """Proxy for one guild's player on a node.

    Local state:

    - ``playing`` / ``paused`` / ``track`` / ``timestamp``: what this client
      asked the node to do, corrected by track end events.
    - ``state``: the last snapshot the node reported, merged field by field.
    - ``filters``: the last filter configuration successfully requested.
    - ``voice_update_state``: the voice credentials last handed to the node,
      kept so the owner can replay them when moving to another node.

    Commands are not queued or serialized; concurrent calls race at the
    transport. Nothing here guards against use after :meth:`destroy`.
    """

    def __init__(
        self,
        transport: NodeTransport,
        guild_id: str,
        registry: SessionRegistry,
        *,
        settings: PlayerSettings | None = None,
        notifier: PlayerNotifier | None = None,
    ) -> None:
        if not guild_id:
            raise ValidationError(ErrorMessages.EMPTY_GUILD_ID, field="guild_id")

        self._guild_id = guild_id
        self._transport = transport
        self._registry = registry
        self._settings = settings or PlayerSettings()
        self.notifier = notifier or PlayerNotifier()

        self.state = PlayerState()
        self.filters = Filters()
        self.playing = False
        self.paused = False
        self.track: str | None = None
        self.timestamp: datetime | None = None
        self.voice_update_state: VoiceUpdateState | None = None

        self._background_tasks: set[asyncio.Task[Any]] = set()

        logger.debug(LogTemplates.PLAYER_CREATED, guild_id)

    def __repr__(self) -> str:
        return (
            f"<Player guild_id={self._guild_id!r} playing={self.playing} "
            f"paused={self.paused} track={'set' if self.track else None}>"
        )

    # ── Accessors ───────────────────────────────────────────────────

    @property
    def guild_id(self) -> str:
        return self._guild_id

    @property
    def transport(self) -> NodeTransport:
        return self._transport

    @property
    def registry(self) -> SessionRegistry:
        """The registry that created this player."""
        return self._registry

    @property
    def settings(self) -> PlayerSettings:
        return self._settings

    @property
    def connected(self) -> bool:
        return self._transport.connected

    def bind(self, transport: NodeTransport) -> None:
        """Point this player at another node's transport. Local state is kept."""
        self._transport = transport
        logger.info(LogTemplates.PLAYER_REBOUND, self._guild_id)

    def subscribe(self, kind: type[PlayerNotification], handler: Any) -> None:
        self.notifier.subscribe(kind, handler)

    def unsubscribe(self, kind: type[PlayerNotification], handler: Any) -> None:
        self.notifier.unsubscribe(kind, handler)

    # ── Commands ────────────────────────────────────────────────────

    async def play(
        self,
        track: str,
        *,
        start_time: int | None = None,
        end_time: int | None = None,
        no_replace: bool | None = None,
        pause: bool | None = None,
        volume: float | None = None,
    ) -> Any:
        """Play a track by its base64 handle.

        Args:
            track: Track handle as returned by the node's track loader.
            start_time: Position in milliseconds to start from.
            end_time: Position in milliseconds to stop at.
            no_replace: Ask the node to ignore this call if a track is already playing.
            pause: Start the track paused.
            volume: Initial volume as a multiplier, on the same scale as
                :meth:`set_volume`. It is multiplied by ``PlayerSettings.volume_scale``
                (100 by default) before it is sent, so 1.0 reaches the node as 100.
        """
        command = PlayCommand(
            guild_id=self._guild_id,
            track=track,
            start_time=start_time,
            end_time=end_time,
            no_replace=no_replace,
            pause=pause,
            volume=self._scale_volume(volume) if volume is not None else None,
        )
        result = await self._send(command)
        self.track = track
        self.playing = True
        self.timestamp = utcnow()
        return result

    async def stop(self) -> Any:
        result = await self._send(self._stop_command())
        self._clear_track()
        return result

    async def pause(self, pause: bool = True) -> Any:
        """Pause (or with ``pause=False`` resume) the current track."""
        result = await self._send(PauseCommand(guild_id=self._guild_id, pause=pause))
        self.paused = pause
        self._notify(PauseChanged, paused=pause)
        return result

    async def resume(self) -> Any:
        return await self.pause(False)

    async def set_volume(self, volume: float) -> Any:
        """Set the volume for the current track.

        ``volume`` is a multiplier: 1.0 is the node's default, the upper bound
        comes from ``PlayerSettings.max_volume``.
        """
        result = await self._send(
            VolumeCommand(guild_id=self._guild_id, volume=self._scale_volume(volume))
        )
        self._notify(VolumeChanged, volume=volume)
        return result

    async def seek(self, position: int) -> Any:
        """Seek the current track to *position* milliseconds."""
        result = await self._send(SeekCommand(guild_id=self._guild_id, position=position))
        self._notify(Seeked, position=position)
        return result

    async def set_filters(self, filters: Filters | Mapping[str, Any]) -> Any:
        """Replace the node's whole filter configuration."""
        filters = Filters.model_validate(filters)
        result = await self._send(FiltersCommand(guild_id=self._guild_id, filters=filters))
        self.filters = filters
        self._notify(FiltersChanged, filters=filters)
        return result

    async def set_equalizer(self, bands: Iterable[EqualizerBand | Mapping[str, Any]]) -> Any:
        """Replace the equalizer bands, keeping every other active filter."""
        return await self.set_filters(self.filters.with_equalizer(bands))

    async def connect(self, voice_update_state: VoiceUpdateState | Mapping[str, Any]) -> Any:
        """Hand the node the voice credentials it needs to join the guild's voice server."""
        voice_update_state = VoiceUpdateState.model_validate(voice_update_state)
        result = await self._send(
            VoiceUpdateCommand(
                guild_id=self._guild_id,
                session_id=voice_update_state.session_id,
                event=voice_update_state.event,
            )
        )
        self.voice_update_state = voice_update_state
        return result

    def switch_channel(self, channel_id: str | None, options: JoinOptions | None = None) -> Any:
        """Move to another voice channel through the owning registry.

        This goes over the Discord gateway, not the node, so it does not
        require the node to be connected. Returns whatever the registry returns.
        """
        logger.debug(LogTemplates.COMMAND_SWITCH_CHANNEL, self._guild_id, channel_id)
        return self._registry.switch_channel(self._guild_id, channel_id, options or JoinOptions())

    async def destroy(self) -> Any:
        """Tell the node to release this guild's player. The proxy is unusable afterwards."""
        return await self._send(PlayerCommand(op=PlayerOp.DESTROY, guild_id=self._guild_id))

    # ── Inbound ─────────────────────────────────────────────────────

    def dispatch(self, message: Mapping[str, Any]) -> None:
        """Route a raw node frame addressed to this guild."""
        match message.get("op"):
            case NodeOp.EVENT:
                self.handle_event(message)
            case NodeOp.PLAYER_UPDATE:
                self.handle_state_update(message)
            case op:
                logger.debug(LogTemplates.MESSAGE_IGNORED, op, self._guild_id)

    def handle_event(self, data: Mapping[str, Any] | PlayerEvent) -> None:
        event = parse_event(data)
        logger.debug(LogTemplates.EVENT_RECEIVED, event.type, self._guild_id)

        match event:
            case TrackStartEvent():
                self._notify(TrackStarted, event=event)
            case TrackEndEvent():
                if not event.is_replaced:
                    self.playing = False
                self.track = None
                self.timestamp = None
                self._notify(TrackEnded, event=event)
            case TrackExceptionEvent() | WebSocketClosedEvent():
                self._notify(PlayerErrored, event=event)
            case TrackStuckEvent():
                self._stop_in_background()
                self._notify(TrackEnded, event=event)
            case _:
                logger.debug(LogTemplates.EVENT_UNKNOWN, event.type, self._guild_id)
                self._notify(
                    PlayerWarning,
                    message=ErrorMessages.UNEXPECTED_EVENT_TYPE.format(event_type=event.type),
                )

    def handle_state_update(self, data: Mapping[str, Any] | PlayerUpdate | PlayerState) -> None:
        """Merge a node state report. ``filters`` (the requested config) is left untouched."""
        self.state = self.state.merge(parse_player_update(data))
        logger.debug(LogTemplates.STATE_MERGED, self._guild_id, self.state.position)
        self._notify(StateUpdated, state=self.state)

    async def drain(self) -> None:
        """Wait for stops issued by stuck tracks and for async notification handlers."""
        while self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)
        await self.notifier.drain()

    # ── Internals ───────────────────────────────────────────────────

    async def _send(self, command: PlayerCommand) -> Any:
        return await self._start_send(command)

    def _start_send(self, command: PlayerCommand) -> Awaitable[Any]:
        """Check the connection and hand *command* to the transport without awaiting it."""
        if not self._transport.connected:
            logger.warning(LogTemplates.COMMAND_NOT_CONNECTED, command.op, self._guild_id)
            raise NotConnectedError(self._guild_id)

        logger.debug(LogTemplates.COMMAND_SENDING, command.op, self._guild_id)
        return self._transport.send(command.to_payload())

    def _scale_volume(self, volume: float) -> int:
        if volume < 0 or volume > self._settings.max_volume:
            raise ValidationError(
                ErrorMessages.VOLUME_OUT_OF_RANGE.format(
                    volume=volume, max_volume=self._settings.max_volume
                ),
                field="volume",
            )
        return round(volume * self._settings.volume_scale)

    def _notify(self, kind: type[PlayerNotification], **fields: Any) -> None:
        if self.notifier.has_subscribers(kind):
            self.notifier.publish(kind(guild_id=self._guild_id, **fields))

    def _stop_command(self) -> PlayerCommand:
        return PlayerCommand(op=PlayerOp.STOP, guild_id=self._guild_id)

    def _clear_track(self) -> None:
        self.playing = False
        self.track = None
        self.timestamp = None

    def _stop_in_background(self) -> asyncio.Task[Any] | None:
        # The stop op is handed to the transport before this returns; only the
        # acknowledgement is awaited in the task. Failures only reach the log.
        loop = asyncio.get_running_loop()
        try:
            pending = self._start_send(self._stop_command())
        except NotConnectedError as exc:
            logger.warning(LogTemplates.TRACK_STUCK_STOP_FAILED, self._guild_id, exc)
            return None

        task = loop.create_task(self._finish_stop(pending))
        self._background_tasks.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    async def _finish_stop(self, pending: Awaitable[Any]) -> Any:
        result = await pending
        self._clear_track()
        return result

    def _on_background_done(self, task: asyncio.Task[Any]) -> None:
        self._background_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.warning(LogTemplates.TRACK_STUCK_STOP_FAILED, self._guild_id, task.exception())
