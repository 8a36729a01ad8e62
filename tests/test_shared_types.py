"""Unit tests for domain/shared/types.py and validators.py."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import BaseModel, ValidationError

from lavalink_player.domain.shared.types import (
    DiscordSnowflake,
    DurationMs,
    NonEmptyStr,
    TrackTitleStr,
    UtcDatetimeField,
)
from lavalink_player.domain.shared.validators import is_real_number, validate_discord_snowflake


def _model_for(annotation, field_name: str = "v"):
    """Dynamically create a Pydantic model with a single field of the given type."""
    return type("M", (BaseModel,), {"__annotations__": {field_name: annotation}})


# ── DiscordSnowflake ────────────────────────────────────────────────


class TestDiscordSnowflake:
    M = _model_for(DiscordSnowflake)

    def test_valid_snowflake(self):
        assert self.M(v=2**64 - 1).v == 2**64 - 1

    @pytest.mark.parametrize("value", [0, -1, 2**64])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValidationError):
            self.M(v=value)


# ── Strings and durations ───────────────────────────────────────────


class TestStrings:
    def test_non_empty(self):
        M = _model_for(NonEmptyStr)
        assert M(v="x").v == "x"
        with pytest.raises(ValidationError):
            M(v="")

    def test_track_title_length(self):
        M = _model_for(TrackTitleStr)
        assert len(M(v="a" * 500).v) == 500
        with pytest.raises(ValidationError):
            M(v="a" * 501)


class TestDurationMs:
    M = _model_for(DurationMs)

    def test_zero_allowed(self):
        assert self.M(v=0).v == 0

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            self.M(v=-1)


# ── UtcDatetimeField ────────────────────────────────────────────────


class TestUtcDatetime:
    M = _model_for(UtcDatetimeField)

    def test_naive_rejected(self):
        with pytest.raises(ValidationError):
            self.M(v=datetime(2024, 1, 1))

    def test_normalised_to_utc(self):
        local = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
        value = self.M(v=local).v
        assert value.tzinfo == UTC
        assert value.hour == 10


# ── Validators ──────────────────────────────────────────────────────


class TestValidateDiscordSnowflake:
    def test_valid(self):
        assert validate_discord_snowflake(42) == 42

    def test_non_positive(self):
        with pytest.raises(ValueError, match="must be positive"):
            validate_discord_snowflake(0)

    def test_too_large(self):
        with pytest.raises(ValueError, match="exceeds maximum"):
            validate_discord_snowflake(2**64)


class TestIsRealNumber:
    @pytest.mark.parametrize("value", [0, 50, -3, 1.5, float("inf")])
    def test_numbers(self, value):
        assert is_real_number(value) is True

    @pytest.mark.parametrize("value", [True, False, "50", None, float("nan"), 1j])
    def test_non_numbers(self, value):
        assert is_real_number(value) is False
