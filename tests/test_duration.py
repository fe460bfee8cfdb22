"""Tests for duration parsing."""

from datetime import timedelta

import pytest

from neba_pipeline import parse_duration


class TestParseDuration:
    """Tests for parse_duration function."""

    def test_milliseconds(self) -> None:
        assert parse_duration("100ms") == 100
        assert parse_duration("1ms") == 1

    def test_seconds(self) -> None:
        assert parse_duration("1s") == 1000
        assert parse_duration("30s") == 30000

    def test_minutes(self) -> None:
        assert parse_duration("5m") == 300_000

    def test_hours(self) -> None:
        """Production default expiration is half a day."""
        assert parse_duration("12h") == 43_200_000

    def test_days(self) -> None:
        assert parse_duration("7d") == 604_800_000

    def test_integer_passthrough(self) -> None:
        assert parse_duration(1000) == 1000

    def test_timedelta(self) -> None:
        assert parse_duration(timedelta(minutes=2)) == 120_000

    def test_zero_rejected(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            parse_duration("0s")
        with pytest.raises(ValueError, match="positive"):
            parse_duration(0)
        with pytest.raises(ValueError, match="positive"):
            parse_duration(timedelta(0))

    def test_invalid_format(self) -> None:
        """Test that invalid formats raise ValueError."""
        for bad in ("invalid", "10x", "s10", "", "10"):
            with pytest.raises(ValueError, match="Invalid duration"):
                parse_duration(bad)

    def test_bool_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration(True)
