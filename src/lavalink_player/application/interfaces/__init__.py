"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between a player and the code
that owns it. These are the "ports" in hexagonal architecture.
"""

from lavalink_player.application.interfaces.session_registry import SessionRegistry
from lavalink_player.application.interfaces.transport import NodeTransport

__all__ = [
    "NodeTransport",
    "SessionRegistry",
]
