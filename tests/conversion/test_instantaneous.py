"""Tests for InstantaneousConverter (regular INST to regular INST)."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from tsintervalkit import ConversionSpec, TimeSeries, change_interval


def _hourly_inst(values, start: str = "2024-01-01 00:00") -> TimeSeries:
    return TimeSeries.regular(start, np.asarray(values, dtype=float), "1Hour", scale="INST")


def _at(ts: TimeSeries, stamp: str) -> float:
    return ts.get_value(pd.Timestamp(stamp))


class TestPointSampling:
    """Coarser INST targets take the value at their own instant."""

    def test_samples_at_target_instants(self):
        result = change_interval(_hourly_inst(np.arange(49.0)), ConversionSpec.regular("INST", "INST", "6Hour"))
        assert _at(result, "2024-01-01 00:00") == 0.0
        assert _at(result, "2024-01-01 06:00") == 6.0
        assert _at(result, "2024-01-02 18:00") == 42.0
        assert _at(result, "2024-01-03 00:00") == 48.0

    def test_falls_back_to_last_present_in_window(self):
        values = np.arange(49.0)
        values[6] = np.nan
        result = change_interval(_hourly_inst(values), ConversionSpec.regular("INST", "INST", "6Hour"))
        assert _at(result, "2024-01-01 06:00") == 5.0

    def test_window_without_data_is_missing(self):
        values = np.arange(13.0)
        values[1:7] = np.nan
        result = change_interval(_hourly_inst(values), ConversionSpec.regular("INST", "INST", "6Hour"))
        assert np.isnan(_at(result, "2024-01-01 06:00"))
        assert _at(result, "2024-01-01 12:00") == 12.0

    def test_persist_substitutes_before_sampling(self):
        values = np.arange(13.0)
        values[1:7] = np.nan
        spec = ConversionSpec.regular("INST", "INST", "6Hour", missing_policy="Persist")
        result = change_interval(_hourly_inst(values), spec)
        assert _at(result, "2024-01-01 06:00") == 0.0


class TestStatistic:
    """Max/Min over the source slots in ``(T - I, T]``."""

    def test_max_and_min(self):
        source = _hourly_inst(np.arange(49.0))
        maximum = change_interval(source, ConversionSpec.regular("INST", "INST", "6Hour", statistic="Max"))
        minimum = change_interval(source, ConversionSpec.regular("INST", "INST", "6Hour", statistic="Min"))
        assert _at(maximum, "2024-01-01 06:00") == 6.0
        assert _at(minimum, "2024-01-01 06:00") == 1.0
        assert _at(maximum, "2024-01-03 00:00") == 48.0

    def test_partial_leading_window_is_missing(self):
        # 00:00 only holds one of the six slots of (Dec 31 18:00, 00:00]
        result = change_interval(
            _hourly_inst(np.arange(49.0)),
            ConversionSpec.regular("INST", "INST", "6Hour", statistic="Max"),
        )
        assert np.isnan(_at(result, "2024-01-01 00:00"))

    def test_missing_threshold(self):
        values = np.arange(49.0)
        values[3] = np.nan
        source = _hourly_inst(values)
        strict = ConversionSpec.regular("INST", "INST", "6Hour", statistic="Max")
        lenient = ConversionSpec.regular("INST", "INST", "6Hour", statistic="Max", allow_missing_count=1)
        assert np.isnan(_at(change_interval(source, strict), "2024-01-01 06:00"))
        assert _at(change_interval(source, lenient), "2024-01-01 06:00") == 6.0

    def test_largest_value_wins_regardless_of_position(self):
        values = np.zeros(7)
        values[2] = 9.0
        values[5] = -4.0
        source = _hourly_inst(values)
        maximum = change_interval(source, ConversionSpec.regular("INST", "INST", "6Hour", statistic="Max"))
        minimum = change_interval(source, ConversionSpec.regular("INST", "INST", "6Hour", statistic="Min"))
        assert _at(maximum, "2024-01-01 06:00") == 9.0
        assert _at(minimum, "2024-01-01 06:00") == -4.0


class TestInterpolation:
    """Finer INST targets are interpolated."""

    def test_midpoint(self):
        source = TimeSeries.regular("2024-01-01 00:00", [0.0, 10.0], "2Hour", scale="INST")
        result = change_interval(source, ConversionSpec.regular("INST", "INST", "1Hour"))
        assert _at(result, "2024-01-01 00:00") == 0.0
        assert _at(result, "2024-01-01 01:00") == pytest.approx(5.0)
        assert _at(result, "2024-01-01 02:00") == 10.0

    def test_daily_to_six_hourly(self):
        source = TimeSeries.regular("2024-01-01", [0.0, 4.0], "Day", scale="INST")
        result = change_interval(source, ConversionSpec.regular("INST", "INST", "6Hour"))
        expected = [0.0, 1.0, 2.0, 3.0, 4.0]
        stamps = pd.date_range("2024-01-01", periods=5, freq=pd.Timedelta(hours=6))
        assert [result.get_value(s) for s in stamps] == pytest.approx(expected)

    def test_missing_point_blanks_neighbours(self):
        source = TimeSeries.regular("2024-01-01 00:00", [0.0, np.nan, 20.0], "2Hour", scale="INST")
        result = change_interval(source, ConversionSpec.regular("INST", "INST", "1Hour"))
        assert _at(result, "2024-01-01 00:00") == 0.0
        assert np.isnan(_at(result, "2024-01-01 01:00"))
        assert np.isnan(_at(result, "2024-01-01 03:00"))
        assert _at(result, "2024-01-01 04:00") == 20.0


class TestIdentity:
    """Converting to the source interval reproduces the source."""

    def test_inst_identity(self):
        values = np.array([1.0, np.nan, 3.5, 2.0])
        source = _hourly_inst(values)
        result = change_interval(source, ConversionSpec.regular("INST", "INST", "1Hour"))
        np.testing.assert_array_equal(result.to_pandas().loc[source.index].to_numpy(), values)

    def test_mean_identity(self):
        values = np.array([1.0, 2.0, np.nan, 4.0])
        source = TimeSeries.regular("2024-01-01 01:00", values, "1Hour", scale="MEAN")
        result = change_interval(source, ConversionSpec.regular("MEAN", "MEAN", "1Hour"))
        np.testing.assert_array_equal(result.to_pandas().loc[source.index].to_numpy(), values)
