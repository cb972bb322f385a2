"""API discovery and introspection for tsintervalkit.

Provides ``describe()`` which returns a machine-readable schema of
the library's public surface: version, stable APIs, error codes with
fix hints, supported conversions and the accepted enum values.

Usage:
    >>> from tsintervalkit import describe
    >>> info = describe()
    >>> info["version"]
    '0.1.0'
"""

from __future__ import annotations

from typing import Any


def describe() -> dict[str, Any]:
    """Return a machine-readable API schema for tsintervalkit.

    Returns a dictionary with:
      - ``version``: library version string
      - ``apis``: mapping of task names to primary API functions
      - ``error_codes``: mapping of error codes to class/description/fix_hint
      - ``supported_conversions``: rows of the dispatch table
      - ``spec_fields``: ConversionSpec fields with their defaults
      - ``enums``: accepted values for every enum field

    Returns:
        Structured dict describing the full public surface.
    """
    import tsintervalkit

    return {
        "version": tsintervalkit.__version__,
        "apis": _get_apis(),
        "error_codes": _get_error_codes(),
        "supported_conversions": _get_supported_conversions(),
        "spec_fields": _get_spec_fields(),
        "enums": _get_enums(),
    }


def _get_apis() -> dict[str, dict[str, str]]:
    """Return stable API surface."""
    return {
        "change_interval": {
            "function": "change_interval",
            "description": "Convert a series to a new interval and/or measurement scale",
        },
        "interval_relation": {
            "function": "interval_relation",
            "description": "Signed integer ratio between two intervals (0 if incompatible)",
        },
        "bounding_period": {
            "function": "bounding_period",
            "description": "Output period for converting a series to a target interval",
        },
        "build_spec": {
            "function": "ConversionSpec.from_mapping",
            "description": "Validate a conversion spec from loosely typed input",
        },
        "build_series": {
            "function": "TimeSeries.regular / TimeSeries.irregular / TimeSeries.from_pandas",
            "description": "Wrap values into the series container consumed by the engine",
        },
    }


def _get_error_codes() -> dict[str, dict[str, str]]:
    """Return all error codes with descriptions and fix hints."""
    from tsintervalkit.core.errors import ERROR_REGISTRY

    result: dict[str, dict[str, str]] = {}
    for code, cls in ERROR_REGISTRY.items():
        result[code] = {
            "class": cls.__name__,
            "description": cls.__doc__ or "",
            "fix_hint": cls.fix_hint,
        }
    return result


def _get_supported_conversions() -> list[dict[str, str]]:
    from tsintervalkit.conversion.engine import supported_conversions

    return supported_conversions()


def _get_spec_fields() -> dict[str, dict[str, Any]]:
    """Return ConversionSpec fields, whether they are required and their defaults."""
    from tsintervalkit.core.config import ConversionSpec

    fields: dict[str, dict[str, Any]] = {}
    for name, info in ConversionSpec.model_fields.items():
        required = info.is_required()
        fields[name] = {
            "required": required,
            "default": None if required else info.default,
        }
    return fields


def _get_enums() -> dict[str, list[str]]:
    from tsintervalkit.core.types import (
        ChangeIntervalStatistic,
        EndpointHandling,
        IntervalBase,
        MissingInputPolicy,
        OutputFillMethod,
        TimeScale,
        YearType,
    )

    return {
        "scale": [m.value for m in TimeScale],
        "interval_base": [m.value for m in IntervalBase],
        "missing_policy": [m.value for m in MissingInputPolicy],
        "output_fill_method": [m.value for m in OutputFillMethod],
        "handle_endpoints": [m.value for m in EndpointHandling],
        "statistic": [m.value for m in ChangeIntervalStatistic],
        "output_year_type": [m.value for m in YearType],
    }


__all__ = ["describe"]
