"""Core error types with rich context.

Every failure the conversion engine reports is one of five error types.
Validation errors are raised before an output series is allocated; only
``ConversionAbortedError`` can surface from inside the main pass.
"""

from __future__ import annotations

from typing import Any


class TSIntervalError(Exception):
    """Base exception with rich context.

    Subclasses only override ``error_code`` and ``fix_hint``; the offending
    values travel in ``context`` so callers can diagnose without parsing
    the message.
    """

    error_code: str = "E_UNKNOWN"
    fix_hint: str = ""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        fix_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if fix_hint:
            self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f"(context: {self.context})")
        if self.fix_hint:
            parts.append(f"[hint: {self.fix_hint}]")
        return " ".join(parts)

    def to_agent_dict(self) -> dict[str, Any]:
        """Serialize the error for machine consumers."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": {k: _jsonable(v) for k, v in self.context.items()},
            "fix_hint": self.fix_hint,
        }


class ConfigurationError(TSIntervalError):
    """Conversion spec is invalid or requests an unsupported scale pairing."""

    error_code = "E_CONFIGURATION"
    fix_hint = "Check source_scale/target_scale against describe()['supported_conversions']"


class IntervalMismatchError(TSIntervalError):
    """Source and target intervals are not exact multiples of each other."""

    error_code = "E_INTERVAL_MISMATCH"
    fix_hint = "Choose a target interval that evenly divides or is divisible by the source interval"


class UnsupportedConversionError(TSIntervalError):
    """Combination of regularity, scale and interval cannot be converted."""

    error_code = "E_UNSUPPORTED_CONVERSION"
    fix_hint = "Irregular targets are not supported; irregular sources need a sub-daily target unless converting INST"


class EmptySourceError(TSIntervalError):
    """Source series has no samples."""

    error_code = "E_EMPTY_SOURCE"
    fix_hint = "Provide a source series with at least one timestamp"


class ConversionAbortedError(TSIntervalError):
    """Unexpected failure while filling the output series."""

    error_code = "E_CONVERSION_ABORTED"
    fix_hint = "Inspect the chained exception; the timestamp in context is where the pass stopped"


# Error registry for lookup
ERROR_REGISTRY: dict[str, type[TSIntervalError]] = {
    "E_CONFIGURATION": ConfigurationError,
    "E_INTERVAL_MISMATCH": IntervalMismatchError,
    "E_UNSUPPORTED_CONVERSION": UnsupportedConversionError,
    "E_EMPTY_SOURCE": EmptySourceError,
    "E_CONVERSION_ABORTED": ConversionAbortedError,
}


def get_error_class(error_code: str) -> type[TSIntervalError]:
    """Get error class by code."""
    return ERROR_REGISTRY.get(error_code, TSIntervalError)


def _jsonable(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return str(value)
