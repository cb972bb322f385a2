"""Core types, configuration and errors for tsintervalkit."""

from __future__ import annotations

from tsintervalkit.core.config import ConversionSpec
from tsintervalkit.core.errors import (
    ERROR_REGISTRY,
    ConfigurationError,
    ConversionAbortedError,
    EmptySourceError,
    IntervalMismatchError,
    TSIntervalError,
    UnsupportedConversionError,
    get_error_class,
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

__all__ = [
    # Config
    "ConversionSpec",
    # Interval
    "IRREGULAR",
    "TimeInterval",
    # Enums
    "ChangeIntervalStatistic",
    "EndpointHandling",
    "IntervalBase",
    "MissingInputPolicy",
    "OutputFillMethod",
    "TimeScale",
    "YearType",
    # Errors
    "ERROR_REGISTRY",
    "ConfigurationError",
    "ConversionAbortedError",
    "EmptySourceError",
    "IntervalMismatchError",
    "TSIntervalError",
    "UnsupportedConversionError",
    "get_error_class",
]
