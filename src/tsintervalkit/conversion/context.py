"""State shared by the orchestrator and the converters for one call."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from tsintervalkit.core.config import ConversionSpec
from tsintervalkit.core.interval import TimeInterval
from tsintervalkit.core.types import IntervalBase, YearType
from tsintervalkit.series.cursor import SeriesCursor
from tsintervalkit.series.timeseries import TimeSeries
from tsintervalkit.utils.temporal import year_type_period


@dataclass(frozen=True)
class ConversionContext:
    """Everything a converter needs for one conversion.

    Created by the orchestrator after validation; the two cursors belong to
    this call only.

    Attributes:
        source: Series being converted
        target: Freshly allocated output, pre-filled with missing
        spec: Validated conversion spec
        relation: Interval relation (negative when aggregating)
        allow_missing_count: Effective missing-slot threshold
        allow_missing_consecutive: Effective missing-run threshold
        source_cursor: Cursor over ``source``
        target_cursor: Cursor over ``target``
    """

    source: TimeSeries
    target: TimeSeries
    spec: ConversionSpec
    relation: int
    allow_missing_count: int
    allow_missing_consecutive: int
    source_cursor: SeriesCursor
    target_cursor: SeriesCursor

    @property
    def aggregating(self) -> bool:
        return self.relation < 0

    def target_window(self, timestamp: pd.Timestamp) -> tuple[pd.Timestamp, pd.Timestamp]:
        """Period covered by the output step stamped ``timestamp``.

        Yearly output with a non-calendar year type covers that type's year
        labelled by the step's calendar year.
        """
        year_type = self.spec.output_year_type
        if year_type is not YearType.CALENDAR and self.target.interval.base is IntervalBase.YEAR:
            return year_type_period(timestamp.year, year_type)
        return interval_window(timestamp, self.target.interval)

    def write(self, timestamp: pd.Timestamp, value: float | None) -> None:
        """Store a value in the output; ``None`` stores the missing sentinel."""
        self.target.set_value(timestamp, self.target.missing if value is None else value)


def interval_window(
    timestamp: pd.Timestamp,
    interval: TimeInterval,
) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Period covered by a sample stamped ``timestamp``.

    Returns ``(t - I, t)`` for end-stamped intervals (the period is
    ``(t - I, t]``) and ``(t, t + I)`` for start-stamped ones (``[t, t + I)``).
    """
    if interval.stamped_at_end:
        return interval.add(timestamp, -1), timestamp
    return timestamp, interval.add(timestamp)


class WindowTally:
    """Running sums and missing counts for one target interval."""

    __slots__ = (
        "total",
        "present",
        "missing",
        "seen",
        "run",
        "longest_run",
        "last",
        "maximum",
        "minimum",
    )

    def __init__(self) -> None:
        self.total = 0.0
        self.present = 0
        self.missing = 0
        self.seen = 0
        self.run = 0
        self.longest_run = 0
        self.last: float | None = None
        self.maximum: float | None = None
        self.minimum: float | None = None

    def add_missing(self, count: int = 1) -> None:
        """Record ``count`` consecutive missing slots."""
        if count <= 0:
            return
        self.missing += count
        self.run += count
        self.longest_run = max(self.longest_run, self.run)

    def add(self, value: float, missing: bool) -> None:
        """Record one source sample (after substitution)."""
        self.seen += 1
        if missing:
            self.add_missing()
            return
        self.run = 0
        self.present += 1
        self.total += value
        self.last = value
        self.maximum = value if self.maximum is None else max(self.maximum, value)
        self.minimum = value if self.minimum is None else min(self.minimum, value)

    @property
    def mean(self) -> float:
        return self.total / self.present

    def acceptable(self, allow_count: int, allow_consecutive: int) -> bool:
        """Whether the interval has data and stays within both thresholds."""
        return (
            self.present > 0
            and self.missing <= allow_count
            and self.longest_run <= allow_consecutive
        )
