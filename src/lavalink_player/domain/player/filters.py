"""Audio filter configuration applied by the node.

Mirrors the node's ``filters`` op. Every field is optional; a field left as
``None`` is omitted from the payload and the node leaves that filter off.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lavalink_player.domain.shared.types import (
    EqualizerBandIndex,
    EqualizerGain,
    NonNegativeFloat,
)


class FilterModel(BaseModel):
    """Base for filter models: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class EqualizerBand(FilterModel):
    band: EqualizerBandIndex
    gain: EqualizerGain = 0.0


class Karaoke(FilterModel):
    level: float | None = None
    mono_level: float | None = None
    filter_band: float | None = None
    filter_width: float | None = None


class Timescale(FilterModel):
    speed: NonNegativeFloat | None = None
    pitch: NonNegativeFloat | None = None
    rate: NonNegativeFloat | None = None


class Tremolo(FilterModel):
    frequency: float | None = Field(default=None, gt=0.0)
    depth: float | None = Field(default=None, gt=0.0, le=1.0)


class Vibrato(FilterModel):
    frequency: float | None = Field(default=None, gt=0.0, le=14.0)
    depth: float | None = Field(default=None, gt=0.0, le=1.0)


class Rotation(FilterModel):
    rotation_hz: float | None = None


class Distortion(FilterModel):
    sin_offset: float | None = None
    sin_scale: float | None = None
    cos_offset: float | None = None
    cos_scale: float | None = None
    tan_offset: float | None = None
    tan_scale: float | None = None
    offset: float | None = None
    scale: float | None = None


class ChannelMix(FilterModel):
    left_to_left: float | None = Field(default=None, ge=0.0, le=1.0)
    left_to_right: float | None = Field(default=None, ge=0.0, le=1.0)
    right_to_left: float | None = Field(default=None, ge=0.0, le=1.0)
    right_to_right: float | None = Field(default=None, ge=0.0, le=1.0)


class LowPass(FilterModel):
    smoothing: float | None = None


class Filters(FilterModel):
    """Full filter configuration as last requested from (or reported by) the node."""

    volume: NonNegativeFloat | None = None
    equalizer: list[EqualizerBand] | None = None
    karaoke: Karaoke | None = None
    timescale: Timescale | None = None
    tremolo: Tremolo | None = None
    vibrato: Vibrato | None = None
    rotation: Rotation | None = None
    distortion: Distortion | None = None
    channel_mix: ChannelMix | None = None
    low_pass: LowPass | None = None

    @property
    def is_empty(self) -> bool:
        return not self.to_payload()

    def with_equalizer(self, bands: Iterable[EqualizerBand | Mapping[str, Any]]) -> Filters:
        """Return a copy whose equalizer is replaced wholesale by *bands*."""
        validated = [EqualizerBand.model_validate(band) for band in bands]
        return self.model_copy(update={"equalizer": validated})

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
