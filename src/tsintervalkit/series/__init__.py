"""Time-series container and cursor consumed by the conversion engine."""

from __future__ import annotations

from tsintervalkit.series.cursor import Sample, SeriesCursor
from tsintervalkit.series.timeseries import TimeSeries

__all__ = [
    "Sample",
    "SeriesCursor",
    "TimeSeries",
]
