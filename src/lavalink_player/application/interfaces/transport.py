"""Port interface for the connection to an audio node."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class NodeTransport(ABC):
    """Interface for the websocket link a player sends its commands through.

    One transport is shared by every player bound to the same node, so each
    payload carries its own ``guildId``.
    """

    @property
    @abstractmethod
    def connected(self) -> bool:
        """Whether the link is currently open. Must be answerable without awaiting."""
        ...

    @abstractmethod
    async def send(self, payload: dict[str, Any]) -> Any:
        """Send one JSON payload, resolving on acknowledgement and raising on failure."""
        ...
