"""Base exception classes for domain-level errors."""

from __future__ import annotations

from lavalink_player.domain.shared.messages import ErrorMessages


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class PlayerError(DomainError):
    """Base exception for errors raised by a player session."""

    def __init__(self, guild_id: str, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code)
        self.guild_id = guild_id


class NotConnectedError(PlayerError):
    """Raised when a command is issued while the bound node is disconnected.

    Nothing has been sent to the node and no local state has changed when
    this is raised.
    """

    def __init__(self, guild_id: str, message: str | None = None) -> None:
        super().__init__(guild_id, message or ErrorMessages.NO_CONNECTION, code="NOT_CONNECTED")
