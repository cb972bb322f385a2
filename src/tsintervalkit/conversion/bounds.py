"""Output period of a conversion."""

from __future__ import annotations

import logging
from typing import NamedTuple

import pandas as pd

from tsintervalkit.core.interval import TimeInterval
from tsintervalkit.core.types import IntervalBase, YearType
from tsintervalkit.series.timeseries import TimeSeries
from tsintervalkit.utils.temporal import count_intervals, year_type_label

logger = logging.getLogger(__name__)


class BoundingPeriod(NamedTuple):
    """Inclusive start and end of the output series."""

    start: pd.Timestamp
    end: pd.Timestamp


def bounding_period(
    source: TimeSeries,
    target_interval: TimeInterval,
    year_type: YearType = YearType.CALENDAR,
) -> BoundingPeriod:
    """Compute the period of the output series.

    Both ends of the source period are truncated to a boundary of the
    target interval and the end is advanced by one target interval. When a
    regular source is split into a finer interval, the output also spans
    everything the first and last source samples cover: end-stamped sources
    move the start back by one source interval, start-stamped sources
    advance the end by the number of target intervals inside the last
    source interval.

    The end always lands on the grid stepped from the start. Multipliers
    that do not divide the day (``5Hour``, ``7Minute``) truncate each
    day's boundaries independently, so the truncated end is moved forward
    onto that grid.

    Yearly output with a non-calendar ``year_type`` is stamped on January 1
    of each year label, from the year holding the first sample to the one
    after the year holding the last.

    Args:
        source: Non-empty source series
        target_interval: Interval of the output
        year_type: Year definition for yearly output

    Returns:
        Bounding period; the source period itself for an irregular target
    """
    if not target_interval.is_regular:
        return BoundingPeriod(source.start, source.end)

    if year_type is not YearType.CALENDAR and target_interval.base is IntervalBase.YEAR:
        start = pd.Timestamp(year_type_label(source.start, year_type), 1, 1)
        end = pd.Timestamp(year_type_label(source.end, year_type) + 1, 1, 1)
        logger.debug("Bounding period for %s years: %s .. %s", year_type, start, end)
        return BoundingPeriod(start, end)

    first = source.start
    trailing = 1
    finer = source.is_regular and target_interval.nominal_seconds < source.interval.nominal_seconds
    if finer and source.interval.stamped_at_end:
        first = source.interval.add(source.start, -1)
    elif finer:
        trailing = max(1, count_intervals(source.end, source.interval.add(source.end), target_interval))

    start = target_interval.truncate(first)
    end = target_interval.add(target_interval.truncate(source.end), trailing)
    end = target_interval.add(start, count_intervals(start, end, target_interval))
    logger.debug(
        "Bounding period for %s -> %s: %s .. %s (%d trailing)",
        source.interval,
        target_interval,
        start,
        end,
        trailing,
    )
    return BoundingPeriod(start, end)
