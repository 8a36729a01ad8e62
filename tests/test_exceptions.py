"""Tests for the domain exception hierarchy."""

import pytest

from lavalink_player.domain.shared.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    InvalidArgumentError,
    InvalidOperationError,
    InvalidStateError,
    NoTrackAvailableError,
    ResolutionError,
    ValidationError,
)


class TestDomainError:
    def test_default_code_is_class_name(self):
        error = DomainError("failed")
        assert error.message == "failed"
        assert error.code == "DomainError"
        assert str(error) == "failed"

    def test_invalid_operation_default_message(self):
        error = InvalidOperationError("play", "destroyed")
        assert error.message == "Cannot perform 'play' in state 'destroyed'"
        assert error.operation == "play"
        assert error.current_state == "destroyed"

    def test_business_rule_default_message(self):
        assert BusinessRuleViolationError("X").message == "Business rule violated: X"


class TestPlayerErrors:
    @pytest.mark.parametrize(
        ("error", "base", "code"),
        [
            (InvalidStateError("pause", "destroyed"), InvalidOperationError, "INVALID_STATE"),
            (InvalidArgumentError("bad", field="volume"), ValidationError, "INVALID_ARGUMENT"),
            (NoTrackAvailableError(), BusinessRuleViolationError, "NO_TRACK_AVAILABLE"),
            (ResolutionError("Song"), DomainError, "RESOLUTION_FAILED"),
        ],
    )
    def test_hierarchy_and_codes(self, error, base, code):
        assert isinstance(error, base)
        assert isinstance(error, DomainError)
        assert error.code == code

    def test_invalid_argument_keeps_field(self):
        assert InvalidArgumentError("bad", field="loop").field == "loop"

    def test_no_track_rule(self):
        assert NoTrackAvailableError().rule == "TRACK_REQUIRED"

    def test_resolution_default_message(self):
        error = ResolutionError("Song")
        assert error.track_title == "Song"
        assert error.message == "Could not resolve 'Song'"
