"""
Unit Tests for Wire Protocol Models

Tests for:
- Filters serialization and equalizer replacement
- Inbound event parsing, including unknown tags
- PlayerState merging and timestamps
"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from lavalink_player.domain.player.filters import (
    Distortion,
    EqualizerBand,
    Filters,
    Karaoke,
    LowPass,
    Rotation,
    Tremolo,
    Vibrato,
)
from lavalink_player.domain.player.protocol import (
    PlayCommand,
    PlayerState,
    TrackEndEvent,
    TrackExceptionEvent,
    TrackStartEvent,
    TrackStuckEvent,
    UnknownEvent,
    WebSocketClosedEvent,
    parse_event,
    parse_player_update,
)
from lavalink_player.domain.player.value_objects import ExceptionSeverity, TrackEndReason

GUILD_ID = "123456789012345678"


class TestFilters:
    """Tests for Filters."""

    def test_empty_by_default(self):
        """Should serialize to nothing when no filter is set."""
        assert Filters().to_payload() == {}
        assert Filters().is_empty is True

    def test_camel_case_payload(self):
        """Should use the node's camelCase keys."""
        filters = Filters(
            karaoke=Karaoke(level=1.0, mono_level=1.0, filter_band=220.0, filter_width=100.0),
            rotation=Rotation(rotation_hz=0.2),
            low_pass=LowPass(smoothing=20.0),
            distortion=Distortion(sin_offset=0.0, sin_scale=1.0),
        )

        assert filters.to_payload() == {
            "karaoke": {"level": 1.0, "monoLevel": 1.0, "filterBand": 220.0, "filterWidth": 100.0},
            "rotation": {"rotationHz": 0.2},
            "lowPass": {"smoothing": 20.0},
            "distortion": {"sinOffset": 0.0, "sinScale": 1.0},
        }
        assert filters.is_empty is False

    def test_parses_camel_case(self):
        """Should accept the node's own keys."""
        filters = Filters.model_validate({"channelMix": {"leftToRight": 0.5}})

        assert filters.channel_mix.left_to_right == 0.5

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: Tremolo(depth=1.5),
            lambda: Vibrato(frequency=20.0),
            lambda: EqualizerBand(band=0, gain=1.5),
            lambda: EqualizerBand(band=-1, gain=0.0),
        ],
    )
    def test_out_of_range_rejected(self, factory):
        """Should enforce the node's documented ranges."""
        with pytest.raises(ValidationError):
            factory()

    def test_with_equalizer_returns_copy(self):
        """Should leave the original untouched."""
        original = Filters(volume=1.0, equalizer=[EqualizerBand(band=0, gain=0.1)])

        updated = original.with_equalizer([{"band": 2, "gain": 0.2}])

        assert original.equalizer == [EqualizerBand(band=0, gain=0.1)]
        assert updated.equalizer == [EqualizerBand(band=2, gain=0.2)]
        assert updated.volume == 1.0

    def test_empty_equalizer_is_sent(self):
        """Should keep an explicitly empty band list, which resets the equalizer."""
        assert Filters().with_equalizer([]).to_payload() == {"equalizer": []}


class TestPlayCommand:
    """Tests for outgoing command models."""

    def test_omits_unset_options(self):
        """Should only carry the fields that were given."""
        command = PlayCommand(guild_id=GUILD_ID, track="trackA", pause=False)

        assert command.to_payload() == {
            "op": "play",
            "guildId": GUILD_ID,
            "track": "trackA",
            "pause": False,
        }

    def test_empty_track_rejected(self):
        """Should refuse an empty track handle."""
        with pytest.raises(ValidationError):
            PlayCommand(guild_id=GUILD_ID, track="")


class TestParseEvent:
    """Tests for parse_event."""

    @pytest.mark.parametrize(
        ("tag", "model"),
        [
            ("TrackStartEvent", TrackStartEvent),
            ("TrackEndEvent", TrackEndEvent),
            ("TrackExceptionEvent", TrackExceptionEvent),
            ("TrackStuckEvent", TrackStuckEvent),
            ("WebSocketClosedEvent", WebSocketClosedEvent),
        ],
    )
    def test_known_tags(self, tag, model):
        """Should pick the model for each known tag."""
        event = parse_event({"op": "event", "type": tag, "guildId": GUILD_ID})

        assert type(event) is model
        assert event.guild_id == GUILD_ID

    def test_unknown_tag(self):
        """Should fall back to UnknownEvent and keep extra fields."""
        event = parse_event({"op": "event", "type": "ChaptersLoadedEvent", "guildId": GUILD_ID, "x": 1})

        assert isinstance(event, UnknownEvent)
        assert event.type == "ChaptersLoadedEvent"
        assert event.model_extra == {"x": 1}

    def test_passes_models_through(self):
        """Should return an already parsed event unchanged."""
        event = TrackStartEvent(guild_id=GUILD_ID, track="trackA")

        assert parse_event(event) is event

    def test_track_end_reason(self):
        """Should flag REPLACED ends."""
        replaced = parse_event({"type": "TrackEndEvent", "reason": "REPLACED"})
        finished = parse_event({"type": "TrackEndEvent", "reason": "FINISHED"})

        assert replaced.is_replaced is True
        assert finished.is_replaced is False
        assert finished.reason == TrackEndReason.FINISHED

    def test_exception_severity(self):
        """Should parse the exception severity."""
        event = parse_event(
            {"type": "TrackExceptionEvent", "exception": {"message": "m", "severity": "FAULT"}}
        )

        assert event.exception.severity is ExceptionSeverity.FAULT

    def test_stuck_threshold(self):
        """Should read thresholdMs."""
        event = parse_event({"type": "TrackStuckEvent", "thresholdMs": 5000})

        assert event.threshold_ms == 5000


class TestPlayerState:
    """Tests for PlayerState."""

    def test_merge_overlays_reported_fields(self):
        """Should only replace fields present in the newer report."""
        current = PlayerState(time=1, position=100, connected=True, ping=10)

        merged = current.merge(PlayerState.model_validate({"position": 200, "ping": 12}))

        assert merged.position == 200
        assert merged.ping == 12
        assert merged.connected is True
        assert merged.time == 1

    def test_merge_keeps_explicit_none(self):
        """Should treat an explicitly reported null as a report."""
        merged = PlayerState(ping=10).merge(PlayerState.model_validate({"ping": None}))

        assert merged.ping is None

    def test_merge_never_clears_filters(self):
        """Should keep reported filters when a newer report carries null filters."""
        current = PlayerState.model_validate({"filters": {"volume": 0.3}})

        merged = current.merge(PlayerState.model_validate({"position": 5, "filters": None}))

        assert merged.filters == Filters(volume=0.3)
        assert merged.position == 5

    def test_reported_at(self):
        """Should convert the node's unix millis to UTC."""
        state = PlayerState(time=1_700_000_000_000)

        assert state.reported_at == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
        assert PlayerState().reported_at is None

    def test_parse_player_update(self):
        """Should pull the state out of a playerUpdate frame."""
        state = parse_player_update(
            {"op": "playerUpdate", "guildId": GUILD_ID, "state": {"position": 3, "connected": True}}
        )

        assert state == PlayerState(position=3, connected=True)

    def test_parse_player_update_requires_state(self):
        """Should reject a frame without a state object."""
        with pytest.raises(ValidationError):
            parse_player_update({"op": "playerUpdate", "guildId": GUILD_ID})
