"""Substitution of missing source samples."""

from __future__ import annotations

from tsintervalkit.core.types import MissingInputPolicy
from tsintervalkit.series.timeseries import TimeSeries


def substitute(
    policy: MissingInputPolicy,
    last_good: float | None,
    missing: float,
) -> float:
    """Replacement for a missing source sample.

    Args:
        policy: Configured missing-input policy
        last_good: Last present (never substituted) source value, if any
        missing: Missing-value sentinel of the source

    Returns:
        ``missing`` for KeepMissing, ``0.0`` for ZeroFill, ``last_good``
        for Persist (``missing`` when nothing has been seen yet)
    """
    if policy is MissingInputPolicy.ZERO_FILL:
        return 0.0
    if policy is MissingInputPolicy.PERSIST and last_good is not None:
        return last_good
    return missing


class MissingValueSubstitutor:
    """Applies ``substitute`` along one forward pass over a source series.

    Tracks the last present value; substituted values never become the
    last present value.
    """

    def __init__(self, policy: MissingInputPolicy, series: TimeSeries) -> None:
        self.policy = policy
        self._series = series
        self.last_good: float | None = None

    def resolve(self, value: float) -> float:
        """Return ``value`` or its substitute, recording present values."""
        if self._series.is_missing(value):
            return substitute(self.policy, self.last_good, self._series.missing)
        self.last_good = value
        return value

    def preview(self, value: float) -> float:
        """Same as ``resolve`` without recording anything."""
        if self._series.is_missing(value):
            return substitute(self.policy, self.last_good, self._series.missing)
        return value

    def is_missing(self, value: float) -> bool:
        return self._series.is_missing(value)
