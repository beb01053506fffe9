"""Tests for clock-time and calendar helpers."""
import pytest
from datetime import date


class TestToMinutes:
    """Tests for to_minutes."""

    def test_to_minutes_basic(self):
        """Test conversion of valid HH:mm strings."""
        from chronoguard.utils.timecalc import to_minutes

        assert to_minutes("00:00") == 0
        assert to_minutes("09:30") == 570
        assert to_minutes("23:59") == 1439

    def test_to_minutes_invalid(self):
        """Test that malformed times are rejected."""
        from chronoguard.utils.timecalc import to_minutes

        for bad in ["24:00", "9", "12:60", "ab:cd", ""]:
            with pytest.raises(ValueError, match="Invalid time"):
                to_minutes(bad)


class TestDurationHours:
    """Tests for duration_hours."""

    def test_duration_hours(self):
        """Test duration between start and end."""
        from chronoguard.utils.timecalc import duration_hours

        assert duration_hours("09:00", "17:00") == 8
        assert duration_hours("09:00", "11:20") == pytest.approx(2 + 1 / 3)

    def test_duration_hours_clamped(self):
        """Test that an end before the start yields zero, not a negative value."""
        from chronoguard.utils.timecalc import duration_hours

        assert duration_hours("17:00", "09:00") == 0
        assert duration_hours("10:00", "10:00") == 0


class TestWeekMath:
    """Tests for Monday-anchored week and month ranges."""

    def test_week_start_midweek(self):
        """Test that a Thursday maps to its Monday."""
        from chronoguard.utils.timecalc import week_start

        assert week_start(date(2025, 12, 4)) == date(2025, 12, 1)

    def test_week_start_monday_and_sunday(self):
        """Test that Monday maps to itself and Sunday to the previous Monday."""
        from chronoguard.utils.timecalc import week_start

        assert week_start(date(2025, 12, 1)) == date(2025, 12, 1)
        assert week_start(date(2025, 12, 7)) == date(2025, 12, 1)
        assert week_start(date(2025, 12, 8)) == date(2025, 12, 8)

    def test_week_range_crosses_month(self):
        """Test a week spanning two months."""
        from chronoguard.utils.timecalc import week_range

        assert week_range(date(2025, 10, 1)) == (date(2025, 9, 29), date(2025, 10, 5))

    def test_month_range(self):
        """Test month bounds including December and leap February."""
        from chronoguard.utils.timecalc import month_range

        assert month_range(date(2025, 12, 15)) == (date(2025, 12, 1), date(2025, 12, 31))
        assert month_range(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_parse_date(self):
        """Test ISO date parsing."""
        from chronoguard.utils.timecalc import parse_date

        assert parse_date("2025-12-04") == date(2025, 12, 4)
        with pytest.raises(ValueError, match="Invalid date"):
            parse_date("04/12/2025")


class TestExceedsHours:
    """Tests for exceeds_hours."""

    def test_float_drift_at_limit_is_not_over(self):
        """Test that fractional durations summing exactly to the limit pass."""
        from chronoguard.utils.timecalc import duration_hours, exceeds_hours

        week = sum(duration_hours("09:00", "11:20") for _ in range(17))
        week += duration_hours("20:00", "20:20")

        assert week != 40
        assert not exceeds_hours(week, 40)

    def test_one_minute_over(self):
        """Test that a single extra minute counts as over."""
        from chronoguard.utils.timecalc import exceeds_hours

        assert exceeds_hours(36.5 + 1 / 60, 36.5)
        assert not exceeds_hours(36.5, 36.5)
