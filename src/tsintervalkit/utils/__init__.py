"""Utility helpers for tsintervalkit."""

from __future__ import annotations

from tsintervalkit.utils.temporal import (
    count_intervals,
    count_steps_back,
    date_to_double,
    year_type_label,
    year_type_period,
)

__all__ = [
    "count_intervals",
    "count_steps_back",
    "date_to_double",
    "year_type_label",
    "year_type_period",
]
