"""Sequential cursor over the samples of one series.

Each cursor owns its position; nothing is shared between cursors, so two
conversions can walk the same source series at the same time.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

import pandas as pd

from tsintervalkit.series.timeseries import TimeSeries


class Sample(NamedTuple):
    """One (timestamp, value) pair."""

    timestamp: pd.Timestamp
    value: float


class SeriesCursor:
    """Forward/backward cursor with bounded lookahead.

    The cursor starts before the first sample; ``next()`` moves onto it.
    ``mark()`` and ``restore()`` bracket a lookahead so the caller can scan
    ahead and come back to exactly where it was.

    Args:
        series: Series to walk
    """

    def __init__(self, series: TimeSeries) -> None:
        self._series = series
        self._position = -1

    def __iter__(self) -> Iterator[Sample]:
        while (sample := self.next()) is not None:
            yield sample

    @property
    def series(self) -> TimeSeries:
        return self._series

    @property
    def position(self) -> int:
        return self._position

    def _sample(self, position: int) -> Sample | None:
        if 0 <= position < len(self._series):
            return Sample(self._series.index[position], float(self._series.values[position]))
        return None

    @property
    def current(self) -> Sample | None:
        """Sample under the cursor, ``None`` before the first or after the last."""
        return self._sample(self._position)

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._series)

    def next(self) -> Sample | None:
        """Advance one sample and return it, or ``None`` at end of data."""
        if self._position < len(self._series):
            self._position += 1
        return self._sample(self._position)

    def previous(self) -> Sample | None:
        """Step back one sample and return it, or ``None`` before the start."""
        if self._position >= 0:
            self._position -= 1
        return self._sample(self._position)

    def peek(self) -> Sample | None:
        """The sample ``next()`` would return, without moving."""
        return self._sample(self._position + 1)

    def seek(self, timestamp: pd.Timestamp) -> None:
        """Position the cursor so ``next()`` returns the first sample at or after ``timestamp``."""
        self._position = int(self._series.index.searchsorted(pd.Timestamp(timestamp), side="left")) - 1

    def skip_before(self, timestamp: pd.Timestamp) -> None:
        """Move forward past samples earlier than ``timestamp``; never moves back."""
        target = int(self._series.index.searchsorted(pd.Timestamp(timestamp), side="left")) - 1
        self._position = max(self._position, target)

    def mark(self) -> int:
        return self._position

    def restore(self, mark: int) -> None:
        self._position = mark
