"""Linear interpolation between consecutive instantaneous samples."""

from __future__ import annotations

import logging
from typing import NamedTuple

import pandas as pd

from tsintervalkit.conversion.context import ConversionContext
from tsintervalkit.conversion.missing import MissingValueSubstitutor
from tsintervalkit.core.types import MissingInputPolicy
from tsintervalkit.utils.temporal import date_to_double

logger = logging.getLogger(__name__)


class _Point(NamedTuple):
    timestamp: pd.Timestamp
    value: float
    missing: bool


def interpolate(
    t0: pd.Timestamp,
    v0: float,
    t1: pd.Timestamp,
    v1: float,
    t: pd.Timestamp,
) -> float:
    """Linear interpolation weighted by the fractional-year date measure.

    Args:
        t0: Timestamp of the left point
        v0: Value of the left point
        t1: Timestamp of the right point
        v1: Value of the right point
        t: Instant to evaluate

    Returns:
        Interpolated value; ``v0`` when the two points coincide
    """
    x0 = date_to_double(t0)
    x1 = date_to_double(t1)
    if x1 == x0:
        return v0
    return v0 + (v1 - v0) * (date_to_double(t) - x0) / (x1 - x0)


class LinearInterpolationFiller:
    """Fills target timestamps from the source points that bracket them.

    A target timestamp equal to a source point takes that point's value;
    one strictly between two points is interpolated, and is missing when
    either point is missing after substitution.

    Args:
        policy: Substitution applied to missing source points
        timestamp_at_interval_end: When False, a value computed at instant
            ``T`` is stored at ``T - I``, the start stamp of the target
            interval ending at ``T``
    """

    def __init__(self, policy: MissingInputPolicy, timestamp_at_interval_end: bool = True) -> None:
        self.policy = policy
        self.timestamp_at_interval_end = timestamp_at_interval_end

    def fill(self, ctx: ConversionContext) -> int:
        """Walk the source points and write every target they bracket.

        Returns:
            Number of target timestamps visited
        """
        substitutor = MissingValueSubstitutor(self.policy, ctx.source)
        source_cursor = ctx.source_cursor
        target_cursor = ctx.target_cursor
        visited = 0

        previous: _Point | None = None
        for sample in source_cursor:
            value = substitutor.resolve(sample.value)
            point = _Point(sample.timestamp, value, substitutor.is_missing(value))
            if previous is None:
                previous = point
                continue
            while (slot := target_cursor.peek()) is not None and slot.timestamp < point.timestamp:
                target_cursor.next()
                if slot.timestamp < previous.timestamp:
                    continue
                visited += 1
                self._assign(ctx, slot.timestamp, self._value_at(previous, point, slot.timestamp))
            previous = point

        if previous is not None:
            while (slot := target_cursor.peek()) is not None and slot.timestamp <= previous.timestamp:
                target_cursor.next()
                if slot.timestamp == previous.timestamp:
                    visited += 1
                    self._assign(ctx, slot.timestamp, None if previous.missing else previous.value)

        logger.debug("Interpolated %d target timestamps", visited)
        return visited

    @staticmethod
    def _value_at(left: _Point, right: _Point, timestamp: pd.Timestamp) -> float | None:
        if timestamp == left.timestamp:
            return None if left.missing else left.value
        if left.missing or right.missing:
            return None
        return interpolate(left.timestamp, left.value, right.timestamp, right.value, timestamp)

    def _assign(self, ctx: ConversionContext, timestamp: pd.Timestamp, value: float | None) -> None:
        if not self.timestamp_at_interval_end:
            timestamp = ctx.target.interval.add(timestamp, -1)
        ctx.write(timestamp, value)
