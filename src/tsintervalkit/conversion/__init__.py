"""Interval and measurement-scale conversion engine."""

from __future__ import annotations

from tsintervalkit.conversion.aggregation import AggregationConverter
from tsintervalkit.conversion.bounds import BoundingPeriod, bounding_period
from tsintervalkit.conversion.context import ConversionContext, WindowTally, interval_window
from tsintervalkit.conversion.engine import (
    SUPPORTED_CONVERSIONS,
    change_interval,
    supported_conversions,
)
from tsintervalkit.conversion.instantaneous import InstantaneousConverter
from tsintervalkit.conversion.interpolation import LinearInterpolationFiller, interpolate
from tsintervalkit.conversion.irregular import IrregularSourceConverter
from tsintervalkit.conversion.missing import MissingValueSubstitutor, substitute
from tsintervalkit.conversion.relation import interval_relation

__all__ = [
    # Entry point
    "change_interval",
    "supported_conversions",
    "SUPPORTED_CONVERSIONS",
    # Building blocks
    "BoundingPeriod",
    "bounding_period",
    "interval_relation",
    "interval_window",
    "interpolate",
    "substitute",
    "ConversionContext",
    "MissingValueSubstitutor",
    "WindowTally",
    # Converters
    "AggregationConverter",
    "InstantaneousConverter",
    "IrregularSourceConverter",
    "LinearInterpolationFiller",
]
