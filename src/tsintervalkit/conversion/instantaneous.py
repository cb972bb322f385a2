"""Regular INST to regular INST conversion."""

from __future__ import annotations

import logging

from tsintervalkit.conversion.context import ConversionContext, WindowTally
from tsintervalkit.conversion.interpolation import LinearInterpolationFiller
from tsintervalkit.conversion.missing import MissingValueSubstitutor
from tsintervalkit.core.types import ChangeIntervalStatistic
from tsintervalkit.utils.temporal import count_intervals, count_steps_back

logger = logging.getLogger(__name__)


class InstantaneousConverter:
    """Point sampling when aggregating, interpolation when disaggregating.

    Each target instant ``T`` looks at the source samples in ``(T - I, T]``.
    Without a statistic the last present sample is taken; with ``Max`` or
    ``Min`` every source slot in the window counts and the missing
    thresholds apply as they do for MEAN aggregation.

    Point sampling is bounded on both sides. It does not require a sample
    exactly at ``T``, so a missing reading at ``T`` falls back to the latest
    present one inside the window. It never reaches back past ``T - I``
    either: when the whole window is missing the output is missing, even if
    an older sample is present.
    """

    name = "InstantaneousConverter"

    def convert(self, ctx: ConversionContext) -> None:
        if not ctx.aggregating:
            LinearInterpolationFiller(ctx.spec.missing_policy, timestamp_at_interval_end=True).fill(ctx)
            return
        if ctx.spec.statistic is None:
            self._point_sample(ctx)
        else:
            self._sample_statistic(ctx, ctx.spec.statistic)

    def _point_sample(self, ctx: ConversionContext) -> None:
        substitutor = MissingValueSubstitutor(ctx.spec.missing_policy, ctx.source)
        interval = ctx.target.interval
        written = 0
        for slot in ctx.target_cursor:
            window_start = interval.add(slot.timestamp, -1)
            chosen: float | None = None
            while (sample := ctx.source_cursor.peek()) is not None and sample.timestamp <= slot.timestamp:
                ctx.source_cursor.next()
                value = substitutor.resolve(sample.value)
                if sample.timestamp > window_start and not substitutor.is_missing(value):
                    chosen = value
            if chosen is not None:
                written += 1
            ctx.write(slot.timestamp, chosen)
        logger.debug("Point-sampled %d INST values", written)

    def _sample_statistic(self, ctx: ConversionContext, statistic: ChangeIntervalStatistic) -> None:
        source = ctx.source
        source_interval = source.interval
        interval = ctx.target.interval
        substitutor = MissingValueSubstitutor(ctx.spec.missing_policy, source)

        for slot in ctx.target_cursor:
            window_start = interval.add(slot.timestamp, -1)
            expected = count_intervals(window_start, slot.timestamp, source_interval)
            tally = WindowTally()
            leading = min(
                expected,
                count_steps_back(source.start, window_start, source_interval, inclusive=False),
            )
            tally.add_missing(leading)
            while (sample := ctx.source_cursor.peek()) is not None and sample.timestamp <= slot.timestamp:
                ctx.source_cursor.next()
                value = substitutor.resolve(sample.value)
                if sample.timestamp > window_start:
                    tally.add(value, substitutor.is_missing(value))
            tally.add_missing(expected - tally.seen - leading)

            if not tally.acceptable(ctx.allow_missing_count, ctx.allow_missing_consecutive):
                ctx.write(slot.timestamp, None)
            elif statistic is ChangeIntervalStatistic.MAX:
                ctx.write(slot.timestamp, tally.maximum)
            else:
                ctx.write(slot.timestamp, tally.minimum)
