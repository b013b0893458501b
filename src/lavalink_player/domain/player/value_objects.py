"""Immutable value objects for the player bounded context."""

from __future__ import annotations

from enum import StrEnum


class PlayerOp(StrEnum):
    """Outgoing op codes understood by the node."""

    PLAY = "play"
    STOP = "stop"
    PAUSE = "pause"
    SEEK = "seek"
    VOLUME = "volume"
    FILTERS = "filters"
    DESTROY = "destroy"
    VOICE_UPDATE = "voiceUpdate"


class NodeOp(StrEnum):
    """Incoming op codes routed to a player."""

    EVENT = "event"
    PLAYER_UPDATE = "playerUpdate"


class EventType(StrEnum):
    """Tags of the node's player event union."""

    TRACK_START = "TrackStartEvent"
    TRACK_END = "TrackEndEvent"
    TRACK_EXCEPTION = "TrackExceptionEvent"
    TRACK_STUCK = "TrackStuckEvent"
    WEBSOCKET_CLOSED = "WebSocketClosedEvent"


class TrackEndReason(StrEnum):
    """Reasons the node gives for a track ending.

    Only ``REPLACED`` changes how a player reacts: a new track pre-empted the
    current one, so the player is still playing.
    """

    FINISHED = "FINISHED"
    LOAD_FAILED = "LOAD_FAILED"
    STOPPED = "STOPPED"
    REPLACED = "REPLACED"
    CLEANUP = "CLEANUP"



class ExceptionSeverity(StrEnum):
    """Severity the node attaches to a track exception."""

    COMMON = "COMMON"
    SUSPICIOUS = "SUSPICIOUS"
    FAULT = "FAULT"
