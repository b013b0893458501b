"""Port interface for the registry that owns players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...domain.player.protocol import JoinOptions


class SessionRegistry(ABC):
    """Interface for the owner of every player on a client.

    A player only reaches into its registry to move its guild to another
    voice channel; joining goes through the Discord gateway, which the
    registry owns.
    """

    @abstractmethod
    def switch_channel(self, guild_id: str, channel_id: str | None, options: JoinOptions) -> Any:
        """Ask the gateway to move *guild_id* to *channel_id* (``None`` leaves voice)."""
        ...
