"""Interval conversion orchestrator.

Validates the request, allocates the output series, positions both cursors
and hands the pass to one of three converters.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from tsintervalkit.conversion.aggregation import AggregationConverter, sample_anchor
from tsintervalkit.conversion.bounds import bounding_period
from tsintervalkit.conversion.context import ConversionContext
from tsintervalkit.conversion.instantaneous import InstantaneousConverter
from tsintervalkit.conversion.irregular import IrregularSourceConverter
from tsintervalkit.conversion.relation import interval_relation
from tsintervalkit.core.config import ConversionSpec
from tsintervalkit.core.errors import (
    ConfigurationError,
    ConversionAbortedError,
    EmptySourceError,
    IntervalMismatchError,
    TSIntervalError,
    UnsupportedConversionError,
)
from tsintervalkit.core.types import (
    EndpointHandling,
    IntervalBase,
    TimeScale,
    YearType,
)
from tsintervalkit.series.cursor import SeriesCursor
from tsintervalkit.series.timeseries import TimeSeries

logger = logging.getLogger(__name__)


class Converter(Protocol):
    name: str

    def convert(self, ctx: ConversionContext) -> None: ...


# (source regular?, source scale, target scale) -> converter class
SUPPORTED_CONVERSIONS: dict[tuple[bool, TimeScale, TimeScale], type] = {
    (False, TimeScale.ACCM, TimeScale.ACCM): IrregularSourceConverter,
    (False, TimeScale.MEAN, TimeScale.MEAN): IrregularSourceConverter,
    (False, TimeScale.INST, TimeScale.MEAN): IrregularSourceConverter,
    (False, TimeScale.INST, TimeScale.INST): IrregularSourceConverter,
    (True, TimeScale.INST, TimeScale.INST): InstantaneousConverter,
    (True, TimeScale.INST, TimeScale.MEAN): AggregationConverter,
    (True, TimeScale.MEAN, TimeScale.MEAN): AggregationConverter,
    (True, TimeScale.MEAN, TimeScale.ACCM): AggregationConverter,
    (True, TimeScale.ACCM, TimeScale.MEAN): AggregationConverter,
    (True, TimeScale.ACCM, TimeScale.ACCM): AggregationConverter,
}


def supported_conversions() -> list[dict[str, str]]:
    """Supported (regularity, source scale, target scale) rows and their converter."""
    return [
        {
            "source": "regular" if regular else "irregular",
            "source_scale": source_scale.value,
            "target_scale": target_scale.value,
            "converter": converter.name,
        }
        for (regular, source_scale, target_scale), converter in SUPPORTED_CONVERSIONS.items()
    ]


def change_interval(
    source: TimeSeries,
    spec: ConversionSpec | Mapping[str, Any],
) -> TimeSeries:
    """Convert a series to a new interval and/or measurement scale.

    Args:
        source: Series to convert; not modified
        spec: Conversion spec, or a mapping accepted by
            ``ConversionSpec.from_mapping``

    Returns:
        New regular series over the bounding period, owned by the caller

    Raises:
        ConfigurationError: Invalid spec or unsupported scale pairing
        EmptySourceError: Source has no samples
        UnsupportedConversionError: Irregular target, or irregular source to
            a day-or-coarser non-INST target, or a non-calendar year
            type from a source that is not daily or monthly
        IntervalMismatchError: Intervals are not exact multiples
        ConversionAbortedError: Unexpected failure during the pass
    """
    if not isinstance(spec, ConversionSpec):
        spec = ConversionSpec.from_mapping(spec)

    converter = _select_converter(source, spec)
    target_interval = spec.target_interval

    relation = interval_relation(source.interval, target_interval)
    if relation == 0:
        raise IntervalMismatchError(
            f"Cannot convert {source.interval} to {target_interval}: neither is a multiple of the other",
            context={
                "source_interval": str(source.interval),
                "target_interval": str(target_interval),
                "source_seconds": source.interval.nominal_seconds,
                "target_seconds": target_interval.nominal_seconds,
            },
        )
    _check_direction_options(source, spec, relation)

    allow_count, allow_consecutive = spec.resolve_allow_missing(relation)
    bounds = bounding_period(source, target_interval, spec.output_year_type)
    header = source.header(
        scale=spec.target_scale,
        data_type=spec.new_data_type,
        units=spec.new_units,
    )
    target = TimeSeries.allocate(bounds.start, bounds.end, target_interval, **header)
    target.original_start = source.original_start if source.original_start is not None else source.start
    target.original_end = source.original_end if source.original_end is not None else source.end

    ctx = ConversionContext(
        source=source,
        target=target,
        spec=spec,
        relation=relation,
        allow_missing_count=allow_count,
        allow_missing_consecutive=allow_consecutive,
        source_cursor=SeriesCursor(source),
        target_cursor=SeriesCursor(target),
    )
    _align_cursors(ctx, converter)
    logger.debug(
        "Converting %s %s -> %s %s with %s (relation %d, %d target steps)",
        source.interval,
        spec.source_scale,
        target_interval,
        spec.target_scale,
        converter.name,
        relation,
        len(target),
    )

    try:
        converter.convert(ctx)
    except TSIntervalError:
        raise
    except Exception as exc:
        target_sample = ctx.target_cursor.current
        source_sample = ctx.source_cursor.current
        context = {
            "converter": converter.name,
            "target_timestamp": target_sample.timestamp if target_sample else None,
            "source_timestamp": source_sample.timestamp if source_sample else None,
        }
        logger.warning("Conversion aborted at %s: %s", context["target_timestamp"], exc)
        raise ConversionAbortedError(f"Conversion aborted: {exc}", context=context) from exc

    target.history.append(
        f"Changed interval from {source.interval} {spec.source_scale} "
        f"to {target_interval} {spec.target_scale} using {converter.name}"
    )
    return target


def _select_converter(source: TimeSeries, spec: ConversionSpec) -> Converter:
    if len(source) == 0:
        raise EmptySourceError(
            "Source series has no samples",
            context={"identifier": source.identifier, "interval": str(source.interval)},
        )

    target_interval = spec.target_interval
    if not target_interval.is_regular:
        raise UnsupportedConversionError(
            "Conversion to an irregular interval is not supported",
            context={"source_interval": str(source.interval), "target_interval": str(target_interval)},
        )

    if source.scale is not None and source.scale is not spec.source_scale:
        raise ConfigurationError(
            f"Source series is {source.scale} but the spec declares {spec.source_scale}",
            context={"series_scale": source.scale.value, "source_scale": spec.source_scale.value},
        )

    key = (source.is_regular, spec.source_scale, spec.target_scale)
    converter_cls = SUPPORTED_CONVERSIONS.get(key)
    if converter_cls is None:
        raise ConfigurationError(
            f"Unsupported scale pairing {spec.source_scale} -> {spec.target_scale} "
            f"for a {'regular' if source.is_regular else 'irregular'} source",
            context={
                "source_regular": source.is_regular,
                "source_scale": spec.source_scale.value,
                "target_scale": spec.target_scale.value,
            },
        )

    if (
        not source.is_regular
        and spec.target_scale is not TimeScale.INST
        and target_interval.base.rank >= IntervalBase.DAY.rank
    ):
        raise UnsupportedConversionError(
            f"Irregular {spec.source_scale} data cannot be converted to {target_interval} {spec.target_scale}",
            context={
                "source_scale": spec.source_scale.value,
                "target_scale": spec.target_scale.value,
                "target_interval": str(target_interval),
            },
            fix_hint="Convert to an hourly or finer interval first",
        )

    if spec.output_year_type is not YearType.CALENDAR and not (
        source.is_regular
        and source.interval.multiplier == 1
        and source.interval.base in (IntervalBase.DAY, IntervalBase.MONTH)
    ):
        raise UnsupportedConversionError(
            f"Year type {spec.output_year_type} output requires daily or monthly source data",
            context={
                "source_interval": str(source.interval),
                "output_year_type": spec.output_year_type.value,
            },
            fix_hint="Convert the source to 1Day first",
        )
    return converter_cls()


def _check_direction_options(source: TimeSeries, spec: ConversionSpec, relation: int) -> None:
    if spec.statistic is not None and (relation >= 0 or not source.is_regular):
        raise ConfigurationError(
            f"Statistic {spec.statistic} requires converting regular INST data to a longer interval",
            context={"statistic": spec.statistic.value, "relation": relation},
        )
    if spec.handle_endpoints is EndpointHandling.AVERAGE_ENDPOINTS:
        valid = (
            source.is_regular
            and relation < 0
            and source.interval.base.rank < IntervalBase.DAY.rank
            and spec.target_interval.base.rank <= IntervalBase.DAY.rank
        )
        if not valid:
            raise ConfigurationError(
                "AverageEndpoints requires a sub-daily regular source and a target of one day or less",
                context={
                    "source_interval": str(source.interval),
                    "target_interval": str(spec.target_interval),
                    "relation": relation,
                },
            )


def _align_cursors(ctx: ConversionContext, converter: Converter) -> None:
    """Skip target steps whose interval ends before the first source data."""
    first = ctx.source.start
    if isinstance(converter, AggregationConverter) and not converter.interpolates(ctx):
        anchor = sample_anchor(ctx, first)
        while (slot := ctx.target_cursor.peek()) is not None:
            if ctx.target_window(slot.timestamp)[1] > anchor:
                break
            ctx.target_cursor.next()
    else:
        ctx.target_cursor.skip_before(first)
    skipped = ctx.target_cursor.position + 1
    if skipped:
        logger.debug("Skipped %d target steps before the first source sample", skipped)
