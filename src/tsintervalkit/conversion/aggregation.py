"""Regular MEAN/ACCM targets from regular MEAN, ACCM or INST sources."""

from __future__ import annotations

import logging

import pandas as pd

from tsintervalkit.conversion.context import ConversionContext, WindowTally, interval_window
from tsintervalkit.conversion.interpolation import LinearInterpolationFiller
from tsintervalkit.conversion.missing import MissingValueSubstitutor
from tsintervalkit.core.types import (
    EndpointHandling,
    IntervalBase,
    OutputFillMethod,
    TimeScale,
)
from tsintervalkit.utils.temporal import count_intervals, count_steps_back

logger = logging.getLogger(__name__)


def sample_anchor(ctx: ConversionContext, timestamp: pd.Timestamp) -> pd.Timestamp:
    """Instant that decides which target interval a source sample feeds.

    INST samples are points and use their own timestamp when aggregating;
    MEAN and ACCM samples use the start of the period they cover.
    """
    if ctx.aggregating and ctx.spec.source_scale is TimeScale.INST:
        return timestamp
    return interval_window(timestamp, ctx.source.interval)[0]


class AggregationConverter:
    """Sums or averages source slots into coarser targets, repeats or divides into finer ones."""

    name = "AggregationConverter"

    def interpolates(self, ctx: ConversionContext) -> bool:
        """Whether this conversion is delegated to linear interpolation."""
        return (
            not ctx.aggregating
            and ctx.spec.source_scale is TimeScale.INST
            and ctx.spec.target_scale is TimeScale.MEAN
            and ctx.spec.output_fill_method is OutputFillMethod.INTERPOLATE
        )

    def convert(self, ctx: ConversionContext) -> None:
        if ctx.aggregating:
            self._aggregate(ctx)
        elif self.interpolates(ctx):
            filler = LinearInterpolationFiller(
                ctx.spec.missing_policy,
                timestamp_at_interval_end=ctx.target.interval.stamped_at_end,
            )
            filler.fill(ctx)
        else:
            self._disaggregate(ctx)

    # ------------------------------------------------------------------
    # Aggregating direction
    # ------------------------------------------------------------------

    def _aggregate(self, ctx: ConversionContext) -> None:
        source = ctx.source
        source_interval = source.interval
        substitutor = MissingValueSubstitutor(ctx.spec.missing_policy, source)
        sum_target = ctx.spec.target_scale is TimeScale.ACCM
        average_endpoints = ctx.spec.handle_endpoints is EndpointHandling.AVERAGE_ENDPOINTS
        first_anchor = sample_anchor(ctx, source.start)
        written = 0

        for slot in ctx.target_cursor:
            window_start, window_end = ctx.target_window(slot.timestamp)
            expected = count_intervals(window_start, window_end, source_interval)
            tally = WindowTally()
            leading = min(expected, count_steps_back(first_anchor, window_start, source_interval))
            tally.add_missing(leading)
            opening_value: float | None = None

            while (sample := ctx.source_cursor.peek()) is not None:
                anchor = sample_anchor(ctx, sample.timestamp)
                if anchor >= window_end:
                    break
                ctx.source_cursor.next()
                value = substitutor.resolve(sample.value)
                if anchor < window_start:
                    continue
                missing = substitutor.is_missing(value)
                if anchor == window_start and not missing:
                    opening_value = value
                tally.add(value, missing)
            tally.add_missing(expected - tally.seen - leading)

            if not tally.acceptable(ctx.allow_missing_count, ctx.allow_missing_consecutive):
                ctx.write(slot.timestamp, None)
                continue

            total = tally.total
            if average_endpoints and opening_value is not None:
                closing = ctx.source_cursor.peek()
                if closing is not None and closing.timestamp == window_end:
                    closing_value = substitutor.preview(closing.value)
                    if not substitutor.is_missing(closing_value):
                        total += (closing_value - opening_value) / 2.0
            ctx.write(slot.timestamp, total if sum_target else total / tally.present)
            written += 1

        logger.debug("Aggregated %d target intervals", written)

    # ------------------------------------------------------------------
    # Disaggregating direction
    # ------------------------------------------------------------------

    def _disaggregate(self, ctx: ConversionContext) -> None:
        source = ctx.source
        target_interval = ctx.target.interval
        substitutor = MissingValueSubstitutor(ctx.spec.missing_policy, source)
        divide = ctx.spec.source_scale is TimeScale.ACCM
        ratio_is_fixed = source.interval.base in (IntervalBase.MINUTE, IntervalBase.HOUR)
        written = 0

        for sample in ctx.source_cursor:
            cover_start, cover_end = interval_window(sample.timestamp, source.interval)
            value = substitutor.resolve(sample.value)
            missing = substitutor.is_missing(value)
            if divide and not missing:
                pieces = ctx.relation if ratio_is_fixed else count_intervals(cover_start, cover_end, target_interval)
                value = value / pieces

            while (slot := ctx.target_cursor.peek()) is not None:
                slot_start = interval_window(slot.timestamp, target_interval)[0]
                if slot_start >= cover_end:
                    break
                ctx.target_cursor.next()
                if slot_start < cover_start:
                    continue
                ctx.write(slot.timestamp, None if missing else value)
                written += 1

        logger.debug("Disaggregated into %d target intervals", written)
