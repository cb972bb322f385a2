"""CLI entry point for tsintervalkit.

Enables ``python -m tsintervalkit <command>`` usage.

Subcommands:
    doctor   — Environment check: core dependencies and readiness.
    describe — Machine-readable API schema (JSON to stdout).
    version  — Print tsintervalkit version.
    relation — Interval relation between two intervals.
    bounds   — Output period for converting a period to a target interval.
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys


def _check_import(module_name: str) -> tuple[bool, str | None]:
    """Try importing a module and return (success, version_or_none)."""
    try:
        mod = importlib.import_module(module_name)
        version = getattr(mod, "__version__", getattr(mod, "VERSION", None))
        return True, str(version) if version is not None else "installed"
    except ImportError:
        return False, None


def _cmd_doctor() -> int:
    """Run environment diagnostics."""
    import tsintervalkit

    print(f"tsintervalkit {tsintervalkit.__version__}")
    print(f"Python {sys.version}")
    print()

    core_deps = [
        ("pandas", "pandas"),
        ("numpy", "numpy"),
        ("pydantic", "pydantic"),
    ]

    print("Core dependencies:")
    all_core_ok = True
    for display_name, module_name in core_deps:
        ok, version = _check_import(module_name)
        status = f"  {version}" if ok else "  NOT INSTALLED"
        marker = "ok" if ok else "MISSING"
        print(f"  [{marker:>7s}] {display_name}{status}")
        if not ok:
            all_core_ok = False

    print()

    ok, version = _check_import("pytest")
    status = f"  {version}" if ok else "  not installed"
    marker = "ok" if ok else "---"
    print("Test tier (pip install tsintervalkit[test]):")
    print(f"  [{marker:>7s}] pytest{status}")

    print()

    if all_core_ok:
        print("All systems go.")
    else:
        print("WARNING: Some core dependencies are missing. Install with:")
        print("  pip install tsintervalkit")

    return 0


def _cmd_describe() -> int:
    """Print machine-readable API schema as JSON."""
    from tsintervalkit.discovery import describe

    info = describe()
    json.dump(info, sys.stdout, indent=2, default=str)
    print()  # trailing newline
    return 0


def _cmd_version() -> int:
    """Print version string."""
    import tsintervalkit

    print(tsintervalkit.__version__)
    return 0


def _cmd_relation(source: str, target: str) -> int:
    """Print the interval relation; exit 1 when the intervals are incompatible."""
    from tsintervalkit.conversion.relation import interval_relation
    from tsintervalkit.core.interval import TimeInterval

    try:
        source_interval = TimeInterval.parse(source)
        target_interval = TimeInterval.parse(target)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    relation = interval_relation(source_interval, target_interval)
    if relation < 0:
        direction = "aggregating"
    elif relation > 0:
        direction = "disaggregating"
    else:
        direction = "incompatible"
    result = {
        "source": str(source_interval),
        "target": str(target_interval),
        "relation": relation,
        "direction": direction,
    }
    print(json.dumps(result))
    return 0 if relation else 1


def _cmd_bounds(start: str, end: str, source: str, target: str, year_type: str = "Calendar") -> int:
    """Print the output period for a regular source period."""
    import pandas as pd

    from tsintervalkit.conversion.bounds import bounding_period
    from tsintervalkit.core.interval import TimeInterval
    from tsintervalkit.core.types import YearType
    from tsintervalkit.series.timeseries import TimeSeries

    try:
        output_year_type = YearType(year_type)
        source_interval = TimeInterval.parse(source)
        target_interval = TimeInterval.parse(target)
        if source_interval.is_regular:
            series = TimeSeries.allocate(pd.Timestamp(start), pd.Timestamp(end), source_interval)
        else:
            series = TimeSeries.irregular([pd.Timestamp(start), pd.Timestamp(end)], [0.0, 0.0])
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    period = bounding_period(series, target_interval, output_year_type)
    print(json.dumps({"start": period.start.isoformat(), "end": period.end.isoformat()}))
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tsintervalkit",
        description="tsintervalkit — Interval and scale conversion for time series",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("doctor", help="Environment check: deps, readiness")
    subparsers.add_parser("describe", help="Machine-readable API schema (JSON)")
    subparsers.add_parser("version", help="Print version")

    relation_parser = subparsers.add_parser("relation", help="Interval relation between two intervals")
    relation_parser.add_argument("source", help="Source interval, e.g. 1Hour")
    relation_parser.add_argument("target", help="Target interval, e.g. Day")

    bounds_parser = subparsers.add_parser("bounds", help="Output period for a conversion")
    bounds_parser.add_argument("start", help="First source timestamp (ISO 8601)")
    bounds_parser.add_argument("end", help="Last source timestamp (ISO 8601)")
    bounds_parser.add_argument("source", help="Source interval, e.g. Day")
    bounds_parser.add_argument("target", help="Target interval, e.g. Month")
    bounds_parser.add_argument(
        "--year-type", default="Calendar", help="Year definition for yearly targets, e.g. Water"
    )

    args = parser.parse_args(argv)

    if args.command == "doctor":
        return _cmd_doctor()
    elif args.command == "describe":
        return _cmd_describe()
    elif args.command == "version":
        return _cmd_version()
    elif args.command == "relation":
        return _cmd_relation(args.source, args.target)
    elif args.command == "bounds":
        return _cmd_bounds(args.start, args.end, args.source, args.target, args.year_type)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
