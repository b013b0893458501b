"""
Player Bounded Context

Wire protocol models, audio filters and the notifications a player publishes.
"""

from lavalink_player.domain.player.filters import EqualizerBand, Filters
from lavalink_player.domain.player.notifications import (
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
from lavalink_player.domain.player.protocol import (
    JoinOptions,
    PlayerState,
    TrackEndEvent,
    TrackExceptionEvent,
    TrackStartEvent,
    TrackStuckEvent,
    UnknownEvent,
    VoiceServerUpdate,
    VoiceUpdateState,
    WebSocketClosedEvent,
)
from lavalink_player.domain.player.value_objects import PlayerOp, TrackEndReason

__all__ = [
    # Filters
    "Filters",
    "EqualizerBand",
    # Protocol
    "JoinOptions",
    "PlayerState",
    "VoiceServerUpdate",
    "VoiceUpdateState",
    "TrackStartEvent",
    "TrackEndEvent",
    "TrackExceptionEvent",
    "TrackStuckEvent",
    "WebSocketClosedEvent",
    "UnknownEvent",
    # Value Objects
    "PlayerOp",
    "TrackEndReason",
    # Notifications
    "PlayerNotification",
    "PlayerNotifier",
    "TrackStarted",
    "TrackEnded",
    "PauseChanged",
    "Seeked",
    "VolumeChanged",
    "FiltersChanged",
    "PlayerErrored",
    "PlayerWarning",
    "StateUpdated",
]
