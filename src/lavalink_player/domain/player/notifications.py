"""Player notifications and the per-player notifier that delivers them."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from lavalink_player.domain.player.filters import Filters
from lavalink_player.domain.player.protocol import (
    PlayerState,
    TrackEndEvent,
    TrackExceptionEvent,
    TrackStartEvent,
    TrackStuckEvent,
    WebSocketClosedEvent,
)
from lavalink_player.domain.shared.datetime_utils import utcnow
from lavalink_player.domain.shared.messages import LogTemplates
from lavalink_player.domain.shared.types import (
    GuildIdStr,
    NonEmptyStr,
    PositionMs,
    UtcDatetimeField,
)

logger = logging.getLogger(__name__)

N = TypeVar("N", bound="PlayerNotification")
NotificationHandler = Callable[[N], Any]


class PlayerNotification(BaseModel):
    """Base class for everything a player publishes to its subscribers."""

    model_config = ConfigDict(frozen=True)

    notification_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: UtcDatetimeField = Field(default_factory=utcnow)
    guild_id: GuildIdStr


class TrackStarted(PlayerNotification):
    event: TrackStartEvent


class TrackEnded(PlayerNotification):
    """A track ended on the node, or got stuck and was stopped."""

    event: TrackEndEvent | TrackStuckEvent


class PauseChanged(PlayerNotification):
    paused: bool


class Seeked(PlayerNotification):
    position: PositionMs


class VolumeChanged(PlayerNotification):
    volume: float


class FiltersChanged(PlayerNotification):
    filters: Filters


class PlayerErrored(PlayerNotification):
    """The node reported a failure that is not tied to any pending command."""

    event: TrackExceptionEvent | WebSocketClosedEvent


class PlayerWarning(PlayerNotification):
    message: str


class StateUpdated(PlayerNotification):
    state: PlayerState


class PlayerNotifier:
    """In-memory pub/sub for one player's notifications.

    Delivery is a courtesy broadcast: a notification with no subscribers is
    dropped, nothing is buffered. Handlers run in subscription order; a
    coroutine handler is scheduled on the running loop. Exceptions in
    handlers are logged but do not prevent other handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[PlayerNotification], list[NotificationHandler[Any]]] = defaultdict(list)
        self._tasks: set[asyncio.Task[Any]] = set()

    def subscribe(self, kind: type[N], handler: NotificationHandler[N]) -> None:
        self._handlers[kind].append(handler)
        logger.debug(LogTemplates.NOTIFY_SUBSCRIBED, kind.__name__)

    def unsubscribe(self, kind: type[N], handler: NotificationHandler[N]) -> None:
        handlers = self._handlers.get(kind, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.debug(LogTemplates.NOTIFY_UNSUBSCRIBED, kind.__name__)

    def has_subscribers(self, kind: type[PlayerNotification]) -> bool:
        return bool(self._handlers.get(kind))

    def publish(self, notification: PlayerNotification) -> bool:
        """Deliver *notification* to its subscribers. Returns False if there were none."""
        kind = type(notification)
        handlers = list(self._handlers.get(kind, []))

        if not handlers:
            logger.debug(LogTemplates.NOTIFY_NO_HANDLERS, kind.__name__)
            return False

        logger.debug(LogTemplates.NOTIFY_PUBLISHING, kind.__name__, len(handlers))
        for handler in handlers:
            try:
                result = handler(notification)
            except Exception as e:
                logger.exception(LogTemplates.NOTIFY_HANDLER_ERROR, kind.__name__, e)
                continue
            if inspect.isawaitable(result):
                self._track(kind, result)
        return True

    def _track(self, kind: type[PlayerNotification], awaitable: Any) -> None:
        task = asyncio.ensure_future(awaitable)
        self._tasks.add(task)

        def _done(t: asyncio.Task[Any]) -> None:
            self._tasks.discard(t)
            if not t.cancelled() and t.exception() is not None:
                logger.error(LogTemplates.NOTIFY_HANDLER_ERROR, kind.__name__, t.exception())

        task.add_done_callback(_done)

    async def drain(self) -> None:
        """Wait for every coroutine handler scheduled so far."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        logger.debug(LogTemplates.NOTIFY_CLEARED)
