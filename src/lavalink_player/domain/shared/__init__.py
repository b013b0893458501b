"""
Shared Domain Kernel

Contains exceptions, message templates and constrained types shared by the
player domain.
"""

from lavalink_player.domain.shared.exceptions import (
    DomainError,
    NotConnectedError,
    PlayerError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "PlayerError",
    "NotConnectedError",
]
