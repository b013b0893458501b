# ruff: noqa: N999
"""
Domain Layer

Contains the player's wire protocol and notification model:
- shared/: Cross-cutting exceptions, messages and constrained types
- player/: Lavalink protocol models, filters and player notifications
"""

from lavalink_player.domain.shared.exceptions import DomainError, NotConnectedError

__all__ = [
    "DomainError",
    "NotConnectedError",
]
