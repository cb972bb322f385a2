"""Integer ratio between a source and a target interval."""

from __future__ import annotations

from tsintervalkit.core.interval import TimeInterval


def interval_relation(source: TimeInterval, target: TimeInterval) -> int:
    """Signed number of intervals of one kind that fit in the other.

    Lengths are compared using nominal seconds (30-day month, 360-day
    year), so ``Month`` to ``Year`` is exactly 12.

    Args:
        source: Interval of the source series
        target: Interval requested for the output

    Returns:
        ``-N`` when one target interval spans N source intervals
        (aggregating), ``N`` when one source interval spans N target
        intervals (disaggregating, ``1`` for equal intervals), ``0`` when
        neither length divides the other. An irregular source yields ``-1``;
        an irregular target (irregular source included) yields ``1``.
    """
    if not target.is_regular:
        return 1
    if not source.is_regular:
        return -1

    source_seconds = source.nominal_seconds
    target_seconds = target.nominal_seconds
    if source_seconds < target_seconds:
        if target_seconds % source_seconds == 0:
            return -(target_seconds // source_seconds)
        return 0
    if source_seconds % target_seconds == 0:
        return source_seconds // target_seconds
    return 0
