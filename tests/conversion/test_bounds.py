"""Tests for conversion/bounds.py."""

from __future__ import annotations

import numpy as np
import pandas as pd

from tsintervalkit.conversion.bounds import BoundingPeriod, bounding_period
from tsintervalkit.core.interval import IRREGULAR, TimeInterval
from tsintervalkit.core.types import YearType
from tsintervalkit.series import TimeSeries


def _daily(start: str, end: str) -> TimeSeries:
    index = pd.date_range(start, end, freq=pd.Timedelta(days=1))
    return TimeSeries.regular(start, np.ones(len(index)), "Day")


class TestBoundingPeriod:
    """Output period derivation per interval unit."""

    def test_daily_to_monthly(self):
        period = bounding_period(_daily("2024-01-03", "2024-01-29"), TimeInterval.parse("Month"))
        assert period == BoundingPeriod(pd.Timestamp("2024-01-01"), pd.Timestamp("2024-02-01"))

    def test_covers_source_period(self):
        source = _daily("2024-01-03", "2024-03-17")
        period = bounding_period(source, TimeInterval.parse("Month"))
        assert period.start <= source.start
        assert period.end > source.end

    def test_daily_to_yearly(self):
        period = bounding_period(_daily("2023-05-05", "2024-02-10"), TimeInterval.parse("Year"))
        assert period == BoundingPeriod(pd.Timestamp("2023-01-01"), pd.Timestamp("2025-01-01"))

    def test_hourly_to_six_hour(self):
        source = TimeSeries.regular("2024-01-01 05:00", np.ones(20), "1Hour")
        period = bounding_period(source, TimeInterval.parse("6Hour"))
        # source ends 2024-01-02 00:00, already on a 6-hour boundary
        assert period.start == pd.Timestamp("2024-01-01 00:00")
        assert period.end == pd.Timestamp("2024-01-02 06:00")

    def test_hour_truncation_at_day_end(self):
        source = TimeSeries.regular("2024-01-01 23:00", np.ones(1), "1Hour")
        period = bounding_period(source, TimeInterval.parse("6Hour"))
        assert period.start == pd.Timestamp("2024-01-01 18:00")
        assert period.end == pd.Timestamp("2024-01-02 00:00")

    def test_minute_truncation(self):
        source = TimeSeries.regular("2024-01-01 00:05", np.ones(12), "5Minute")
        period = bounding_period(source, TimeInterval.parse("15Minute"))
        assert period.start == pd.Timestamp("2024-01-01 00:00")
        # last sample 01:00 is on a boundary; one trailing interval is appended
        assert period.end == pd.Timestamp("2024-01-01 01:15")

    def test_hour_multiple_not_dividing_day(self):
        source = TimeSeries.regular("2020-01-01 01:00", np.ones(27), "1Hour")
        period = bounding_period(source, TimeInterval.parse("5Hour"))
        assert period.start == pd.Timestamp("2020-01-01 00:00")
        # grid from midnight runs 05:00, 10:00, ... 2020-01-02 01:00, 06:00
        assert period.end == pd.Timestamp("2020-01-02 06:00")
        assert period.end in TimeInterval.parse("5Hour").range(period.start, period.end)

    def test_daily_to_hourly_keeps_last_day(self):
        period = bounding_period(_daily("2024-01-01", "2024-01-02"), TimeInterval.parse("1Hour"))
        assert period.start == pd.Timestamp("2024-01-01 00:00")
        assert period.end == pd.Timestamp("2024-01-03 00:00")

    def test_end_stamped_source_moves_start_back(self):
        # the 06:00 value covers 00:00-06:00
        source = TimeSeries.regular("2024-01-01 06:00", np.ones(2), "6Hour")
        period = bounding_period(source, TimeInterval.parse("1Hour"))
        assert period.start == pd.Timestamp("2024-01-01 00:00")
        assert period.end == pd.Timestamp("2024-01-01 13:00")

    def test_monthly_to_daily_uses_length_of_last_month(self):
        source = TimeSeries.regular("2024-01-01", np.ones(2), "Month")
        period = bounding_period(source, TimeInterval.parse("Day"))
        assert period.end == pd.Timestamp("2024-03-01")

    def test_irregular_source(self):
        source = TimeSeries.irregular(["2024-01-01 00:13", "2024-01-01 05:41"], [1.0, 2.0])
        period = bounding_period(source, TimeInterval.parse("1Hour"))
        assert period == BoundingPeriod(pd.Timestamp("2024-01-01 00:00"), pd.Timestamp("2024-01-01 06:00"))

    def test_irregular_target(self):
        source = _daily("2024-01-03", "2024-01-05")
        period = bounding_period(source, IRREGULAR)
        assert period == BoundingPeriod(source.start, source.end)


class TestYearTypeBounds:
    """Yearly output for non-calendar years."""

    def test_water_year(self):
        period = bounding_period(
            _daily("2023-10-01", "2024-09-30"), TimeInterval.parse("Year"), YearType.WATER
        )
        assert period == BoundingPeriod(pd.Timestamp("2024-01-01"), pd.Timestamp("2025-01-01"))

    def test_water_year_spanning_two_labels(self):
        period = bounding_period(
            _daily("2023-05-05", "2024-02-10"), TimeInterval.parse("Year"), YearType.WATER
        )
        assert period == BoundingPeriod(pd.Timestamp("2023-01-01"), pd.Timestamp("2025-01-01"))

    def test_year_labelled_by_start(self):
        source = TimeSeries.regular("2024-05-01", np.ones(12), "Month")
        period = bounding_period(source, TimeInterval.parse("Year"), YearType.YEAR_MAY_TO_APR)
        assert period == BoundingPeriod(pd.Timestamp("2024-01-01"), pd.Timestamp("2025-01-01"))

    def test_ignored_for_other_targets(self):
        source = _daily("2024-01-03", "2024-01-29")
        period = bounding_period(source, TimeInterval.parse("Month"), YearType.WATER)
        assert period == bounding_period(source, TimeInterval.parse("Month"))
