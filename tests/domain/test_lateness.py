"""Tests for the lateness detector — pure time arithmetic, no wall clock."""

import pytest

from gohome.config import WorkdayWindow
from gohome.domain.lateness import is_late, resolve_offset_minutes

# 2018-06-27 03:45:18 UTC
MORNING_UTC = 1530071118
# 2018-06-26 21:53:38 UTC
EVENING_UTC = 1530050018
# 2018-06-26 07:00:00 UTC
DAY_START_UTC = 1529996400


class TestKnownTimestamps:
    def test_plus_four_hours_is_in_hours(self):
        assert is_late(MORNING_UTC, 14400) is False

    def test_plus_one_hour_is_late(self):
        assert is_late(MORNING_UTC, 3600) is True

    def test_default_offset_is_in_hours(self):
        assert is_late(EVENING_UTC) is False

    def test_utc_is_late(self):
        assert is_late(EVENING_UTC, 0) is True

    def test_fractional_timestamp(self):
        assert is_late(MORNING_UTC + 0.000184, 14400) is False
        assert is_late("1530071118.000184", 3600) is True


class TestBoundaries:
    def test_day_start_is_in_hours(self):
        assert is_late(DAY_START_UTC, 0) is False

    def test_just_before_day_start_is_late(self):
        assert is_late(DAY_START_UTC - 1, 0) is True
        assert is_late(DAY_START_UTC - 0.001, 0) is True

    def test_last_second_is_in_hours(self):
        assert is_late(DAY_START_UTC + 12 * 3600 - 1, 0) is False

    def test_day_end_is_late(self):
        assert is_late(DAY_START_UTC + 12 * 3600, 0) is True


class TestOffsetResolution:
    @pytest.mark.parametrize(
        "bad",
        [None, "abc", "", float("nan"), float("inf"), True, object(), 86400, -86400, 90000, "-90000"],
    )
    def test_invalid_offsets_use_default(self, bad):
        assert resolve_offset_minutes(bad, -240) == -240

    def test_seconds_to_minutes(self):
        assert resolve_offset_minutes(-14400, -240) == -240
        assert resolve_offset_minutes(19800, 0) == 330
        assert resolve_offset_minutes("3600", 0) == 60

    def test_missing_offset_falls_back_to_utc_minus_four(self):
        # 03:45 UTC is 23:45 the previous evening in UTC-4
        assert is_late(MORNING_UTC, None) is True
        assert is_late(MORNING_UTC, "not-a-number") is True

    def test_numeric_string_offset(self):
        assert is_late(MORNING_UTC, "14400") is False

    def test_custom_default(self):
        assert is_late(MORNING_UTC, None, default_offset_minutes=240) is False

    def test_offset_of_a_day_or_more_uses_default(self):
        assert is_late(MORNING_UTC, 90000) is True
        assert is_late(MORNING_UTC, -86400, default_offset_minutes=240) is False

    def test_widest_real_offsets_are_kept(self):
        assert resolve_offset_minutes(50400, 0) == 840
        assert resolve_offset_minutes(-43200, 0) == -720
        assert resolve_offset_minutes(86399, 0) == 86399 / 60


class TestCustomWindow:
    def test_later_start(self):
        # 07:45 local is before a 09:00 start
        assert is_late(MORNING_UTC, 14400, WorkdayWindow(start_hour=9, duration_hours=8)) is True

    def test_evening_shift(self):
        assert is_late(EVENING_UTC, 0, WorkdayWindow(start_hour=20, duration_hours=3)) is False
