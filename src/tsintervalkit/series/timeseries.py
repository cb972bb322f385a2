"""Parametric time-series container.

One type covers every interval: the grid is described by a ``TimeInterval``
value and the sample semantics by a ``TimeScale`` tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from tsintervalkit.core.interval import IRREGULAR, TimeInterval
from tsintervalkit.core.types import TimeScale

_HEADER_FIELDS = ("identifier", "data_type", "units", "description")


@dataclass
class TimeSeries:
    """Ordered timestamp to value storage with a missing-value sentinel.

    Values outside ``[start, end]`` do not exist. Regular series hold every
    grid step between ``start`` and ``end``; irregular series hold strictly
    increasing, otherwise arbitrary, timestamps. NaN is always treated as
    missing in addition to ``missing``.

    Attributes:
        index: Sample timestamps
        values: Sample values (float64)
        interval: Grid of the series (``IRREGULAR`` for irregular data)
        scale: Measurement scale of the samples, if known
        missing: Missing-value sentinel
        identifier: Free-form series identifier
        data_type: Data type (``"Streamflow"``, ``"Precip"``, ...)
        units: Data units
        description: Human-readable description
        original_start: Start of the data this series was derived from
        original_end: End of the data this series was derived from
        history: Processing notes, oldest first
    """

    index: pd.DatetimeIndex
    values: np.ndarray
    interval: TimeInterval = IRREGULAR
    scale: TimeScale | None = None
    missing: float = np.nan
    identifier: str = ""
    data_type: str = ""
    units: str = ""
    description: str = ""
    original_start: pd.Timestamp | None = None
    original_end: pd.Timestamp | None = None
    history: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.index = pd.DatetimeIndex(self.index)
        self.values = np.array(self.values, dtype=float)
        self.missing = float(self.missing)
        self.interval = TimeInterval.parse(self.interval)
        if self.scale is not None:
            self.scale = TimeScale(self.scale)
        if self.values.ndim != 1 or len(self.values) != len(self.index):
            raise ValueError(
                f"values ({self.values.shape}) must be 1-D and match index length ({len(self.index)})"
            )
        if len(self.index) > 1 and not (
            self.index.is_monotonic_increasing and self.index.is_unique
        ):
            raise ValueError("Timestamps must be strictly increasing")
        if self.interval.is_regular and len(self.index) > 1:
            expected = self.interval.periods(self.index[0], len(self.index))
            if not expected.equals(self.index):
                raise ValueError(f"Timestamps are not on a regular {self.interval} grid")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def regular(
        cls,
        start: pd.Timestamp | str,
        values: Any,
        interval: TimeInterval | str,
        **header: Any,
    ) -> TimeSeries:
        """Create a regular series from a start timestamp and its values."""
        interval = TimeInterval.parse(interval)
        if not interval.is_regular:
            raise ValueError("regular() requires a regular interval")
        values = np.asarray(values, dtype=float)
        index = interval.periods(pd.Timestamp(start), len(values))
        return cls(index=index, values=values, interval=interval, **header)

    @classmethod
    def irregular(cls, timestamps: Any, values: Any, **header: Any) -> TimeSeries:
        """Create an irregular series from explicit timestamps."""
        return cls(index=pd.DatetimeIndex(timestamps), values=values, interval=IRREGULAR, **header)

    @classmethod
    def from_pandas(
        cls,
        series: pd.Series,
        interval: TimeInterval | str | None = None,
        **header: Any,
    ) -> TimeSeries:
        """Create a series from a datetime-indexed ``pd.Series``.

        Regular input is reindexed onto the full grid between its first and
        last timestamp; grid steps absent from the input become missing.

        Args:
            series: Values indexed by timestamp
            interval: Grid of the data; ``None`` or ``"Irregular"`` keeps the
                timestamps as they are
            **header: Header fields (``scale``, ``units``, ...)

        Raises:
            ValueError: If a timestamp is not on the requested grid
        """
        data = series.sort_index()
        header.setdefault("identifier", str(series.name) if series.name is not None else "")
        interval = IRREGULAR if interval is None else TimeInterval.parse(interval)
        if not interval.is_regular or data.empty:
            return cls(index=data.index, values=data.to_numpy(dtype=float), interval=interval, **header)
        grid = interval.range(data.index[0], data.index[-1])
        off_grid = data.index.difference(grid)
        if len(off_grid):
            raise ValueError(
                f"{len(off_grid)} timestamps are not on the {interval} grid, first: {off_grid[0]}"
            )
        # copy: under copy-on-write to_numpy() may return a read-only view
        values = data.reindex(grid).to_numpy(dtype=float, copy=True)
        missing = float(header.get("missing", np.nan))
        values[np.isnan(values)] = missing
        return cls(index=grid, values=values, interval=interval, **header)

    @classmethod
    def allocate(
        cls,
        start: pd.Timestamp,
        end: pd.Timestamp,
        interval: TimeInterval,
        missing: float = np.nan,
        **header: Any,
    ) -> TimeSeries:
        """Allocate a regular series over ``[start, end]`` filled with ``missing``."""
        index = interval.range(start, end)
        values = np.full(len(index), float(missing))
        return cls(index=index, values=values, interval=interval, missing=missing, **header)

    def header(self, **overrides: Any) -> dict[str, Any]:
        """Descriptive metadata suitable for ``allocate``, with overrides applied."""
        fields = {name: getattr(self, name) for name in _HEADER_FIELDS}
        fields["scale"] = self.scale
        fields["missing"] = self.missing
        fields["history"] = list(self.history)
        fields.update({k: v for k, v in overrides.items() if v is not None})
        return fields

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.index)

    @property
    def start(self) -> pd.Timestamp:
        return self.index[0]

    @property
    def end(self) -> pd.Timestamp:
        return self.index[-1]

    @property
    def is_regular(self) -> bool:
        return self.interval.is_regular

    def is_missing(self, value: float | None) -> bool:
        """Whether a value is NaN, ``None`` or the missing sentinel."""
        if value is None or np.isnan(value):
            return True
        return not np.isnan(self.missing) and value == self.missing

    def missing_mask(self) -> np.ndarray:
        mask = np.isnan(self.values)
        if not np.isnan(self.missing):
            mask |= self.values == self.missing
        return mask

    def get_value(self, timestamp: pd.Timestamp) -> float:
        """Value stored at ``timestamp``.

        Raises:
            KeyError: If the series has no sample at ``timestamp``
        """
        return float(self.values[self.index.get_loc(pd.Timestamp(timestamp))])

    def set_value(self, timestamp: pd.Timestamp, value: float) -> bool:
        """Assign a value at ``timestamp``.

        Timestamps outside ``[start, end]`` are ignored.

        Returns:
            True if the value was stored

        Raises:
            KeyError: If ``timestamp`` is inside the period but not a sample
        """
        ts = pd.Timestamp(timestamp)
        if not len(self.index) or ts < self.index[0] or ts > self.index[-1]:
            return False
        self.values[self.index.get_loc(ts)] = value
        return True

    def to_pandas(self, missing_as_nan: bool = True) -> pd.Series:
        """Export as a ``pd.Series`` named after the identifier."""
        values = self.values.copy()
        if missing_as_nan:
            values[self.missing_mask()] = np.nan
        return pd.Series(values, index=self.index.copy(), name=self.identifier or None)
