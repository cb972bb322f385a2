"""Tests for temporal utilities."""

from __future__ import annotations

import pandas as pd
import pytest

from tsintervalkit.core.interval import TimeInterval
from tsintervalkit.utils.temporal import count_intervals, count_steps_back, date_to_double


class TestDateToDouble:
    """Fractional-year date measure."""

    def test_start_of_year(self):
        assert date_to_double(pd.Timestamp("2023-01-01")) == pytest.approx(2023.0)

    def test_midyear_common_year(self):
        # 181 elapsed days in a 365-day year
        assert date_to_double(pd.Timestamp("2023-07-01")) == pytest.approx(2023 + 181 / 365)

    def test_leap_year_uses_366_days(self):
        assert date_to_double(pd.Timestamp("2024-12-31")) == pytest.approx(2024 + 365 / 366)

    def test_time_of_day(self):
        value = date_to_double(pd.Timestamp("2023-01-01 12:00"))
        assert value == pytest.approx(2023 + 0.5 / 365)

    def test_monotonic(self):
        stamps = pd.date_range("2023-12-30", periods=72, freq=pd.Timedelta(hours=1))
        values = [date_to_double(ts) for ts in stamps]
        assert values == sorted(values)


class TestCountIntervals:
    """Literal interval counting."""

    def test_hours_in_day(self):
        count = count_intervals(pd.Timestamp("2024-01-01"), pd.Timestamp("2024-01-02"), TimeInterval.parse("Hour"))
        assert count == 24

    def test_partial_step_counts(self):
        count = count_intervals(
            pd.Timestamp("2024-01-01 00:00"),
            pd.Timestamp("2024-01-01 02:30"),
            TimeInterval.parse("Hour"),
        )
        assert count == 3

    def test_days_in_february_leap(self):
        count = count_intervals(pd.Timestamp("2024-02-01"), pd.Timestamp("2024-03-01"), TimeInterval.parse("Day"))
        assert count == 29

    def test_months(self):
        count = count_intervals(pd.Timestamp("2024-01-01"), pd.Timestamp("2025-01-01"), TimeInterval.parse("Month"))
        assert count == 12

    def test_empty(self):
        start = pd.Timestamp("2024-01-01")
        assert count_intervals(start, start, TimeInterval.parse("Day")) == 0


class TestCountStepsBack:
    """Steps back from an anchor on its own grid."""

    def test_inclusive(self):
        hour = TimeInterval.parse("Hour")
        assert count_steps_back(pd.Timestamp("2024-01-01 03:00"), pd.Timestamp("2024-01-01 00:00"), hour) == 3

    def test_exclusive(self):
        hour = TimeInterval.parse("Hour")
        steps = count_steps_back(
            pd.Timestamp("2024-01-01 03:00"), pd.Timestamp("2024-01-01 00:00"), hour, inclusive=False
        )
        assert steps == 2

    def test_off_grid_limit(self):
        hour = TimeInterval.parse("Hour")
        assert count_steps_back(pd.Timestamp("2024-01-01 02:30"), pd.Timestamp("2024-01-01 00:00"), hour) == 2

    def test_months(self):
        month = TimeInterval.parse("Month")
        assert count_steps_back(pd.Timestamp("2024-04-01"), pd.Timestamp("2024-01-01"), month) == 3

    def test_anchor_before_limit(self):
        hour = TimeInterval.parse("Hour")
        assert count_steps_back(pd.Timestamp("2024-01-01"), pd.Timestamp("2024-01-02"), hour) == 0
