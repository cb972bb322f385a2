"""Temporal utilities: fractional-year date measure and literal interval counting."""

from __future__ import annotations

import math

import pandas as pd

from tsintervalkit.core.interval import TimeInterval
from tsintervalkit.core.types import YearType


def date_to_double(timestamp: pd.Timestamp) -> float:
    """Express a timestamp as a fractional year.

    The fraction is the elapsed part of the calendar year measured in days,
    so a month in a leap year weighs slightly less than the same month in a
    common year. Differences between two values give a calendar-aware
    elapsed measure suitable for interpolation weights.

    Args:
        timestamp: Instant to convert

    Returns:
        ``year + elapsed_days / days_in_year``
    """
    ts = pd.Timestamp(timestamp)
    seconds = ts.hour * 3600 + ts.minute * 60 + ts.second + ts.microsecond / 1e6
    days_in_year = 366 if ts.is_leap_year else 365
    return ts.year + (ts.dayofyear - 1 + seconds / 86400.0) / days_in_year


def count_intervals(
    start: pd.Timestamp,
    end: pd.Timestamp,
    interval: TimeInterval,
) -> int:
    """Count interval steps ``start, start + I, ...`` that fall before ``end``.

    Months and years are counted on the calendar, so January to March is
    two months whatever their lengths.

    Args:
        start: First instant counted
        end: Exclusive upper bound
        interval: Regular step

    Returns:
        Number of steps, 0 when ``end <= start``
    """
    start = pd.Timestamp(start)
    end = pd.Timestamp(end)
    if end <= start:
        return 0
    if interval.is_fixed_length:
        step = interval.add(start) - start
        return math.ceil((end - start) / step)
    count = 0
    while interval.add(start, count) < end:
        count += 1
    return count


def count_steps_back(
    anchor: pd.Timestamp,
    limit: pd.Timestamp,
    interval: TimeInterval,
    inclusive: bool = True,
) -> int:
    """Count whole steps back from ``anchor`` that stay at or after ``limit``.

    With ``inclusive=False`` a step landing exactly on ``limit`` is not
    counted. Used to size the part of a window that precedes the first
    sample of a series on that series' own grid.
    """
    anchor = pd.Timestamp(anchor)
    limit = pd.Timestamp(limit)
    if anchor <= limit:
        return 0
    if interval.is_fixed_length:
        step = interval.add(anchor) - anchor
        steps = (anchor - limit) // step
        if not inclusive and anchor - steps * step == limit:
            steps -= 1
        return int(steps)
    steps = 0
    while True:
        candidate = interval.add(anchor, -(steps + 1))
        if candidate < limit or (not inclusive and candidate == limit):
            return steps
        steps += 1


def year_type_label(timestamp: pd.Timestamp, year_type: YearType) -> int:
    """Year of ``year_type`` that contains ``timestamp``.

    Example:
        >>> year_type_label(pd.Timestamp("2023-10-01"), YearType.WATER)
        2024
    """
    ts = pd.Timestamp(timestamp)
    label = ts.year - year_type.start_year_offset
    if ts.month < year_type.start_month:
        label -= 1
    return label


def year_type_period(year: int, year_type: YearType) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Start (inclusive) and end (exclusive) of year ``year`` of ``year_type``."""
    start = pd.Timestamp(year + year_type.start_year_offset, year_type.start_month, 1)
    return start, start + pd.DateOffset(years=1)
