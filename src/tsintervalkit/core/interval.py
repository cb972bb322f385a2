"""Interval value type: base unit plus multiplier.

Stepping is calendar-aware (months and years have their true length);
the nominal second counts are only used to compare two intervals.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import pandas as pd

from tsintervalkit.core.types import IntervalBase

# Nominal lengths; month is 30 days and year is 360 days.
NOMINAL_SECONDS: dict[IntervalBase, int] = {
    IntervalBase.MINUTE: 60,
    IntervalBase.HOUR: 3600,
    IntervalBase.DAY: 86400,
    IntervalBase.MONTH: 2592000,
    IntervalBase.YEAR: 31104000,
}

_FIXED_UNITS: dict[IntervalBase, str] = {
    IntervalBase.MINUTE: "minutes",
    IntervalBase.HOUR: "hours",
    IntervalBase.DAY: "days",
}

_CALENDAR_UNITS: dict[IntervalBase, str] = {
    IntervalBase.MONTH: "months",
    IntervalBase.YEAR: "years",
}

_INTERVAL_PATTERN = re.compile(r"^\s*(\d*)\s*([A-Za-z_ ]+?)\s*$")


@dataclass(frozen=True)
class TimeInterval:
    """A regular interval (``15Minute``, ``Day``) or ``Irregular``.

    Attributes:
        base: Base unit of the interval
        multiplier: Number of base units per interval; always 1 for irregular
    """

    base: IntervalBase
    multiplier: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.base, IntervalBase):
            object.__setattr__(self, "base", IntervalBase(self.base))
        if self.base is IntervalBase.IRREGULAR:
            object.__setattr__(self, "multiplier", 1)
        elif int(self.multiplier) < 1:
            raise ValueError(f"Interval multiplier must be >= 1, got {self.multiplier}")

    @classmethod
    def parse(cls, text: str | TimeInterval) -> TimeInterval:
        """Parse an interval string such as ``"6Hour"``, ``"Day"`` or ``"15min"``.

        Args:
            text: Interval string, or an existing interval (returned unchanged)

        Returns:
            Parsed interval

        Raises:
            ValueError: If the string is not a recognised interval
        """
        if isinstance(text, TimeInterval):
            return text
        match = _INTERVAL_PATTERN.match(str(text))
        if match is None:
            raise ValueError(f"Unrecognised interval: {text!r}")
        digits, unit = match.groups()
        try:
            base = IntervalBase(unit)
        except ValueError as exc:
            raise ValueError(f"Unrecognised interval base {unit!r} in {text!r}") from exc
        return cls(base, int(digits) if digits else 1)

    def __str__(self) -> str:
        if self.base is IntervalBase.IRREGULAR:
            return self.base.value
        return f"{self.multiplier}{self.base.value}"

    @property
    def is_regular(self) -> bool:
        return self.base is not IntervalBase.IRREGULAR

    @property
    def stamped_at_end(self) -> bool:
        """Whether a sample's timestamp marks the end of the interval it covers.

        Minute and hour data are recorded at the end of the interval;
        day and coarser data are recorded at its start.
        """
        return self.base in (IntervalBase.MINUTE, IntervalBase.HOUR)

    @property
    def nominal_seconds(self) -> int:
        """Approximate length in seconds, 0 for irregular."""
        if not self.is_regular:
            return 0
        return NOMINAL_SECONDS[self.base] * self.multiplier

    @property
    def is_fixed_length(self) -> bool:
        return self.base in _FIXED_UNITS

    def _require_regular(self) -> None:
        if not self.is_regular:
            raise ValueError("Irregular intervals have no step length")

    def add(self, timestamp: pd.Timestamp, steps: int = 1) -> pd.Timestamp:
        """Advance a timestamp by a number of whole intervals.

        Calendar units always step from ``timestamp`` in one move so that
        month-end dates do not drift (Jan 31 + 2 months is Mar 31).
        """
        self._require_regular()
        amount = self.multiplier * steps
        if self.base in _FIXED_UNITS:
            return timestamp + pd.Timedelta(**{_FIXED_UNITS[self.base]: amount})
        return timestamp + pd.DateOffset(**{_CALENDAR_UNITS[self.base]: amount})

    def truncate(self, timestamp: pd.Timestamp) -> pd.Timestamp:
        """Round a timestamp down to the nearest boundary of this interval.

        Minute and hour intervals truncate the time of day to a multiple of
        the multiplier; day drops the time of day; month fixes the day to
        the 1st; year fixes January 1st. Irregular returns the timestamp.
        """
        ts = pd.Timestamp(timestamp)
        if self.base is IntervalBase.MINUTE:
            minutes = ts.hour * 60 + ts.minute
            return ts.normalize() + pd.Timedelta(minutes=minutes - minutes % self.multiplier)
        if self.base is IntervalBase.HOUR:
            return ts.normalize() + pd.Timedelta(hours=ts.hour - ts.hour % self.multiplier)
        if self.base is IntervalBase.DAY:
            return ts.normalize()
        if self.base is IntervalBase.MONTH:
            return ts.replace(day=1).normalize()
        if self.base is IntervalBase.YEAR:
            return ts.replace(month=1, day=1).normalize()
        return ts

    def range(self, start: pd.Timestamp, end: pd.Timestamp) -> pd.DatetimeIndex:
        """All interval steps from ``start`` up to and including ``end``."""
        self._require_regular()
        start = pd.Timestamp(start)
        end = pd.Timestamp(end)
        if end < start:
            return pd.DatetimeIndex([])
        if self.is_fixed_length:
            step = pd.Timedelta(**{_FIXED_UNITS[self.base]: self.multiplier})
            return pd.date_range(start, end, freq=step)
        stamps = []
        k = 0
        current = start
        while current <= end:
            stamps.append(current)
            k += 1
            current = self.add(start, k)
        return pd.DatetimeIndex(stamps)

    def periods(self, start: pd.Timestamp, count: int) -> pd.DatetimeIndex:
        """``count`` consecutive interval steps beginning at ``start``."""
        self._require_regular()
        start = pd.Timestamp(start)
        if self.is_fixed_length:
            step = pd.Timedelta(**{_FIXED_UNITS[self.base]: self.multiplier})
            return pd.date_range(start, periods=count, freq=step)
        return pd.DatetimeIndex([self.add(start, k) for k in range(count)])


IRREGULAR = TimeInterval(IntervalBase.IRREGULAR)
