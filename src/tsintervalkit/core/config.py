"""Typed configuration for a single interval conversion.

Validated once at the boundary; the engine never re-parses options while
converting.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_validator,
)

from tsintervalkit.core.errors import ConfigurationError
from tsintervalkit.core.interval import TimeInterval
from tsintervalkit.core.types import (
    ChangeIntervalStatistic,
    EndpointHandling,
    IntervalBase,
    MissingInputPolicy,
    OutputFillMethod,
    TimeScale,
    YearType,
)


class BaseSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


_ENUM_FIELDS: dict[str, type[StrEnum]] = {
    "source_scale": TimeScale,
    "target_scale": TimeScale,
    "missing_policy": MissingInputPolicy,
    "output_fill_method": OutputFillMethod,
    "handle_endpoints": EndpointHandling,
    "statistic": ChangeIntervalStatistic,
    "output_year_type": YearType,
}


class ConversionSpec(BaseSpec):
    """What to convert to and how to treat missing data on the way.

    Args:
        source_scale: Scale of the source samples
        target_scale: Scale of the output samples
        target_interval: Output interval (``"1Day"``, ``"6Hour"``, ...)
        allow_missing_count: Missing source slots tolerated per target
            interval when aggregating (default 0)
        allow_missing_percent: Same threshold as a percentage of the interval
            ratio; mutually exclusive with ``allow_missing_count``
        allow_missing_consecutive: Longest tolerated run of missing slots;
            defaults to the effective missing count
        missing_policy: Substitution for missing source samples
        output_fill_method: Repeat or Interpolate when disaggregating
            INST to MEAN
        handle_endpoints: Boundary treatment for INST to MEAN aggregation
        statistic: Max/Min instead of point sampling for INST to INST
            aggregation
        output_year_type: Twelve-month period covered by a yearly output
            value; only for 1Year MEAN or ACCM targets
        new_data_type: Data type of the output; defaults to the source's
        new_units: Units of the output; defaults to the source's
    """

    source_scale: TimeScale
    target_scale: TimeScale
    target_interval: TimeInterval

    allow_missing_count: int | None = Field(None, ge=0)
    allow_missing_percent: float | None = Field(None, ge=0, le=100)
    allow_missing_consecutive: int | None = Field(None, ge=0)

    missing_policy: MissingInputPolicy = MissingInputPolicy.KEEP_MISSING
    output_fill_method: OutputFillMethod = OutputFillMethod.REPEAT
    handle_endpoints: EndpointHandling = EndpointHandling.INCLUDE_FIRST_ONLY
    statistic: ChangeIntervalStatistic | None = None
    output_year_type: YearType = YearType.CALENDAR

    new_data_type: str | None = None
    new_units: str | None = None

    @field_validator(*_ENUM_FIELDS, mode="before")
    @classmethod
    def _coerce_enum(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or isinstance(value, StrEnum):
            return value
        return _ENUM_FIELDS[info.field_name](value)

    @field_validator("target_interval", mode="before")
    @classmethod
    def _parse_interval(cls, value: Any) -> TimeInterval:
        return TimeInterval.parse(value)

    @field_serializer("target_interval")
    def _serialize_interval(self, value: TimeInterval) -> str:
        return str(value)

    @model_validator(mode="after")
    def _check_options(self) -> ConversionSpec:
        if self.allow_missing_count is not None and self.allow_missing_percent is not None:
            raise ValueError("allow_missing_count and allow_missing_percent are mutually exclusive")
        inst_to_inst = self.source_scale is TimeScale.INST and self.target_scale is TimeScale.INST
        if self.statistic is not None and not inst_to_inst:
            raise ValueError("statistic is only supported for INST to INST conversion")
        inst_to_mean = self.source_scale is TimeScale.INST and self.target_scale is TimeScale.MEAN
        if self.handle_endpoints is EndpointHandling.AVERAGE_ENDPOINTS and not inst_to_mean:
            raise ValueError("AverageEndpoints is only supported for INST to MEAN conversion")
        if self.output_year_type is not YearType.CALENDAR:
            yearly = self.target_interval.base is IntervalBase.YEAR and self.target_interval.multiplier == 1
            if not yearly or self.target_scale is TimeScale.INST:
                raise ValueError(
                    f"output_year_type {self.output_year_type} requires a 1Year MEAN or ACCM target"
                )
        return self

    def resolve_allow_missing(self, relation: int) -> tuple[int, int]:
        """Effective (count, consecutive) missing thresholds for a relation.

        A percentage is converted to a count of source slots per target
        interval using the magnitude of the interval relation.
        """
        if self.allow_missing_percent is not None:
            count = int(abs(relation) * self.allow_missing_percent / 100.0)
        else:
            count = self.allow_missing_count or 0
        consecutive = count if self.allow_missing_consecutive is None else self.allow_missing_consecutive
        return count, consecutive

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> ConversionSpec:
        """Build a spec from loosely typed input, raising ``ConfigurationError``.

        Args:
            payload: Field names to values (strings are accepted for enums
                and the interval)

        Raises:
            ConfigurationError: If any field is missing, unknown or invalid
        """
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            problems = [
                {"field": ".".join(str(p) for p in err["loc"]), "error": err["msg"]}
                for err in exc.errors()
            ]
            raise ConfigurationError(
                "Invalid conversion spec",
                context={"errors": problems, "payload": dict(payload)},
            ) from exc

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------

    @classmethod
    def regular(
        cls,
        source_scale: TimeScale | str,
        target_scale: TimeScale | str,
        target_interval: TimeInterval | str,
        **overrides: Any,
    ) -> ConversionSpec:
        """Plain conversion that leaves missing samples missing."""
        return cls.from_mapping(
            {
                "source_scale": source_scale,
                "target_scale": target_scale,
                "target_interval": target_interval,
                **overrides,
            }
        )

    @classmethod
    def alert_increment(
        cls,
        target_interval: TimeInterval | str,
        **overrides: Any,
    ) -> ConversionSpec:
        """Increment-style gauge data (precipitation tips): missing means zero."""
        settings: dict[str, Any] = {
            "source_scale": TimeScale.ACCM,
            "target_scale": TimeScale.ACCM,
            "target_interval": target_interval,
            "missing_policy": MissingInputPolicy.ZERO_FILL,
        }
        settings.update(overrides)
        return cls.from_mapping(settings)

    @classmethod
    def alert_regular(
        cls,
        source_scale: TimeScale | str,
        target_scale: TimeScale | str,
        target_interval: TimeInterval | str,
        **overrides: Any,
    ) -> ConversionSpec:
        """Report-on-change gauge data: missing means unchanged."""
        settings: dict[str, Any] = {
            "source_scale": source_scale,
            "target_scale": target_scale,
            "target_interval": target_interval,
            "missing_policy": MissingInputPolicy.PERSIST,
        }
        settings.update(overrides)
        return cls.from_mapping(settings)
