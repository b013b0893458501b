"""Reusable Pydantic Annotated types shared by the protocol and notification models.

Models simply annotate their fields::

    from lavalink_player.domain.shared.types import GuildIdStr, NonNegativeInt

    class MyModel(BaseModel):
        guild_id: GuildIdStr
        position: NonNegativeInt
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator, Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
"""Float >= 0.0."""

PositionMs = Annotated[int, Field(ge=0)]
"""Track position in milliseconds."""

EqualizerBandIndex = Annotated[int, Field(ge=0, le=14)]
"""Lavalink equalizer band: 0 … 14 (15 bands, 25 Hz … 16 kHz)."""

EqualizerGain = Annotated[float, Field(ge=-0.25, le=1.0)]
"""Equalizer band gain: -0.25 (muted) … 1.0 (doubled)."""

NodeVolume = Annotated[int, Field(ge=0, le=1000)]
"""Volume on the node's percentage scale: 0 … 1 000."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

GuildIdStr = Annotated[str, Field(min_length=1)]
"""Opaque guild (session) identifier as sent on the wire."""

TrackHandle = Annotated[str, Field(min_length=1)]
"""Base64 track blob issued by the node. Never decoded locally."""


# ── Datetime constraints ────────────────────────────────────────────

def _ensure_utc(v: datetime) -> datetime:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if v.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return v.astimezone(UTC)


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""
