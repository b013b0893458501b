from unittest.mock import AsyncMock, MagicMock

import pytest

GUILD_ID = "123456789012345678"

# ============================================================================
# Collaborator Fixtures
# ============================================================================


@pytest.fixture
def transport():
    """Connected node transport that acknowledges every payload."""
    from lavalink_player.application.interfaces.transport import NodeTransport

    mock = MagicMock(spec=NodeTransport)
    mock.connected = True
    mock.send = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def registry():
    """Session registry that records channel switches."""
    from lavalink_player.application.interfaces.session_registry import SessionRegistry

    mock = MagicMock(spec=SessionRegistry)
    mock.switch_channel = MagicMock(return_value=True)
    return mock


# ============================================================================
# Player Fixtures
# ============================================================================


@pytest.fixture
def player(transport, registry):
    """Player bound to the mock transport and registry."""
    from lavalink_player.application.services.player import Player

    return Player(transport, GUILD_ID, registry)


@pytest.fixture
def voice_update():
    """Raw voice credentials as a gateway handler would collect them."""
    return {
        "sessionId": "f3b1c0d2e4a5",
        "event": {
            "token": "voice-token",
            "guild_id": GUILD_ID,
            "endpoint": "us-east123.discord.media:443",
        },
    }
