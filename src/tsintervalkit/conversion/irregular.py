"""Irregular source to regular target."""

from __future__ import annotations

import logging

import pandas as pd

from tsintervalkit.conversion.context import ConversionContext, WindowTally
from tsintervalkit.conversion.interpolation import interpolate
from tsintervalkit.conversion.missing import MissingValueSubstitutor
from tsintervalkit.core.types import MissingInputPolicy, TimeScale
from tsintervalkit.series.cursor import Sample

logger = logging.getLogger(__name__)


class IrregularSourceConverter:
    """Collects irregular samples into regular target intervals ``(T - I, T]``.

    A window holding samples becomes their sum (ACCM), the mean of the
    present ones (MEAN) or the last present one (INST). A window with no
    sample is filled from the next sample when one exists: the run of
    empty windows plus the next sample's own window is counted with a
    bounded lookahead on the target cursor, and the next value is divided
    over that run (ACCM), repeated (MEAN) or interpolated from the previous
    sample (INST). ZeroFill writes 0 and Persist the last present value into
    such windows. Windows before the first sample or after the last one stay
    missing, since the period those samples cover is unknown.
    """

    name = "IrregularSourceConverter"

    def convert(self, ctx: ConversionContext) -> None:
        substitutor = MissingValueSubstitutor(ctx.spec.missing_policy, ctx.source)
        interval = ctx.target.interval
        target_scale = ctx.spec.target_scale

        previous: Sample | None = None
        # (timestamp, divisor) for an ACCM sample already spread over earlier windows
        spread: tuple[pd.Timestamp, int] | None = None
        filled = gaps = 0

        for slot in ctx.target_cursor:
            window_start = interval.add(slot.timestamp, -1)
            tally = WindowTally()
            while (sample := ctx.source_cursor.peek()) is not None and sample.timestamp <= slot.timestamp:
                ctx.source_cursor.next()
                value = substitutor.resolve(sample.value)
                missing = substitutor.is_missing(value)
                previous = Sample(sample.timestamp, value)
                if spread is not None and spread[0] == sample.timestamp:
                    if not missing:
                        value = value / spread[1]
                    spread = None
                if sample.timestamp > window_start:
                    tally.add(value, missing)

            if tally.seen:
                ctx.write(slot.timestamp, self._reduce(tally, target_scale))
                filled += 1
                continue

            upcoming = ctx.source_cursor.peek()
            if upcoming is None or previous is None:
                continue
            spread = self._fill_gap(ctx, substitutor, slot.timestamp, previous, upcoming)
            gaps += 1

        logger.debug("Irregular conversion filled %d windows, bridged %d gaps", filled, gaps)

    @staticmethod
    def _reduce(tally: WindowTally, target_scale: TimeScale) -> float | None:
        if tally.present == 0:
            return None
        if target_scale is TimeScale.ACCM:
            # A partial total would understate the volume.
            return None if tally.missing else tally.total
        if target_scale is TimeScale.MEAN:
            return tally.mean
        return tally.last

    def _fill_gap(
        self,
        ctx: ConversionContext,
        substitutor: MissingValueSubstitutor,
        first_empty: pd.Timestamp,
        previous: Sample,
        upcoming: Sample,
    ) -> tuple[pd.Timestamp, int] | None:
        """Write the empty windows before ``upcoming``; return its ACCM divisor, if any."""
        cursor = ctx.target_cursor
        mark = cursor.mark()
        empty = [first_empty]
        while (slot := cursor.peek()) is not None and slot.timestamp < upcoming.timestamp:
            cursor.next()
            empty.append(slot.timestamp)
        cursor.restore(mark)
        covered = len(empty) + 1

        policy = ctx.spec.missing_policy
        next_value = substitutor.preview(upcoming.value)
        next_missing = substitutor.is_missing(next_value)
        target_scale = ctx.spec.target_scale
        spread: tuple[pd.Timestamp, int] | None = None

        for index, timestamp in enumerate(empty):
            if index:
                cursor.next()
            if policy is MissingInputPolicy.ZERO_FILL:
                value: float | None = 0.0
            elif policy is MissingInputPolicy.PERSIST:
                value = substitutor.last_good
            elif next_missing:
                value = None
            elif target_scale is TimeScale.ACCM:
                value = next_value / covered
                spread = (upcoming.timestamp, covered)
            elif target_scale is TimeScale.MEAN:
                value = next_value
            elif substitutor.is_missing(previous.value):
                value = None
            else:
                value = interpolate(previous.timestamp, previous.value, upcoming.timestamp, next_value, timestamp)
            ctx.write(timestamp, value)
        return spread
