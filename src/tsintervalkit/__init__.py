"""tsintervalkit - Interval and measurement-scale conversion for time series.

Converts a series recorded at one interval (minutes to years, or irregular)
and one measurement scale (instantaneous, mean, accumulated) into a series
at another, keeping volumes as volumes and rates as rates.

Basic usage:
    >>> from tsintervalkit import ConversionSpec, TimeSeries, change_interval
    >>> hourly = TimeSeries.regular("2024-01-01 01:00", values, "1Hour", scale="MEAN")
    >>> spec = ConversionSpec.regular("MEAN", "MEAN", "1Day", allow_missing_count=2)
    >>> daily = change_interval(hourly, spec)
    >>> daily.to_pandas()

Loosely typed input:
    >>> daily = change_interval(hourly, {
    ...     "source_scale": "MEAN",
    ...     "target_scale": "ACCM",
    ...     "target_interval": "Day",
    ... })
"""

__version__ = "0.1.0"

from tsintervalkit.conversion.bounds import BoundingPeriod, bounding_period
from tsintervalkit.conversion.engine import change_interval, supported_conversions
from tsintervalkit.conversion.relation import interval_relation
from tsintervalkit.core.config import ConversionSpec
from tsintervalkit.core.errors import (
    ConfigurationError,
    ConversionAbortedError,
    EmptySourceError,
    IntervalMismatchError,
    TSIntervalError,
    UnsupportedConversionError,
)
from tsintervalkit.core.interval import IRREGULAR, TimeInterval
from tsintervalkit.core.types import (
    ChangeIntervalStatistic,
    EndpointHandling,
    IntervalBase,
    MissingInputPolicy,
    OutputFillMethod,
    TimeScale,
    YearType,
)
from tsintervalkit.discovery import describe
from tsintervalkit.series.cursor import Sample, SeriesCursor
from tsintervalkit.series.timeseries import TimeSeries

__all__ = [
    "__version__",
    # Conversion
    "change_interval",
    "supported_conversions",
    "interval_relation",
    "bounding_period",
    "BoundingPeriod",
    # Configuration
    "ConversionSpec",
    "TimeInterval",
    "IRREGULAR",
    "ChangeIntervalStatistic",
    "EndpointHandling",
    "IntervalBase",
    "MissingInputPolicy",
    "OutputFillMethod",
    "TimeScale",
    "YearType",
    # Series
    "Sample",
    "SeriesCursor",
    "TimeSeries",
    # Errors
    "ConfigurationError",
    "ConversionAbortedError",
    "EmptySourceError",
    "IntervalMismatchError",
    "TSIntervalError",
    "UnsupportedConversionError",
    # Discovery
    "describe",
]
