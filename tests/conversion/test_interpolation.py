"""Tests for conversion/interpolation.py."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from tsintervalkit.conversion.context import ConversionContext
from tsintervalkit.conversion.interpolation import LinearInterpolationFiller, interpolate
from tsintervalkit.core.config import ConversionSpec
from tsintervalkit.core.interval import TimeInterval
from tsintervalkit.core.types import MissingInputPolicy
from tsintervalkit.series import SeriesCursor, TimeSeries


def _make_context(source: TimeSeries, target_interval: str, policy: str = "KeepMissing") -> ConversionContext:
    interval = TimeInterval.parse(target_interval)
    target = TimeSeries.allocate(source.start, source.end, interval)
    spec = ConversionSpec.regular("INST", "INST", interval, missing_policy=policy)
    return ConversionContext(
        source=source,
        target=target,
        spec=spec,
        relation=2,
        allow_missing_count=0,
        allow_missing_consecutive=0,
        source_cursor=SeriesCursor(source),
        target_cursor=SeriesCursor(target),
    )


class TestInterpolate:
    """Point interpolation."""

    def test_midpoint(self):
        value = interpolate(
            pd.Timestamp("2024-01-01 00:00"), 0.0,
            pd.Timestamp("2024-01-01 02:00"), 10.0,
            pd.Timestamp("2024-01-01 01:00"),
        )
        assert value == pytest.approx(5.0)

    def test_endpoints(self):
        t0, t1 = pd.Timestamp("2024-01-01"), pd.Timestamp("2024-02-01")
        assert interpolate(t0, 1.0, t1, 3.0, t0) == pytest.approx(1.0)
        assert interpolate(t0, 1.0, t1, 3.0, t1) == pytest.approx(3.0)

    def test_calendar_weighting(self):
        # Feb 1 is 31 of 60 days into Jan 1 .. Mar 1 2024
        value = interpolate(
            pd.Timestamp("2024-01-01"), 0.0,
            pd.Timestamp("2024-03-01"), 60.0,
            pd.Timestamp("2024-02-01"),
        )
        assert value == pytest.approx(31.0)

    def test_coincident_points(self):
        t = pd.Timestamp("2024-01-01")
        assert interpolate(t, 2.0, t, 9.0, t) == 2.0


class TestLinearInterpolationFiller:
    """Filling target series from bracketing points."""

    def test_fills_between_points(self):
        source = TimeSeries.regular("2024-01-01 00:00", [0.0, 10.0, 20.0], "2Hour")
        ctx = _make_context(source, "1Hour")
        LinearInterpolationFiller(MissingInputPolicy.KEEP_MISSING).fill(ctx)
        assert ctx.target.values.tolist() == pytest.approx([0.0, 5.0, 10.0, 15.0, 20.0])

    def test_missing_endpoint_blanks_bracket(self):
        source = TimeSeries.regular("2024-01-01 00:00", [0.0, np.nan, 20.0], "2Hour")
        ctx = _make_context(source, "1Hour")
        LinearInterpolationFiller(MissingInputPolicy.KEEP_MISSING).fill(ctx)
        values = ctx.target.values
        assert values[0] == 0.0
        assert np.isnan(values[1:4]).all()
        assert values[4] == 20.0

    def test_persist_bridges_missing_point(self):
        source = TimeSeries.regular("2024-01-01 00:00", [4.0, np.nan, 8.0], "2Hour")
        ctx = _make_context(source, "1Hour", policy="Persist")
        LinearInterpolationFiller(MissingInputPolicy.PERSIST).fill(ctx)
        assert ctx.target.values.tolist() == pytest.approx([4.0, 4.0, 4.0, 6.0, 8.0])

    def test_start_stamped_assignment(self):
        source = TimeSeries.regular("2024-01-01 00:00", [0.0, 10.0], "2Hour")
        ctx = _make_context(source, "1Hour")
        LinearInterpolationFiller(MissingInputPolicy.KEEP_MISSING, timestamp_at_interval_end=False).fill(ctx)
        # value computed at T lands on T - 1 hour; the one at 00:00 falls before the period
        assert ctx.target.values[0] == pytest.approx(5.0)
        assert ctx.target.values[1] == pytest.approx(10.0)
        assert np.isnan(ctx.target.values[2])
