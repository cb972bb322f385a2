"""Tests for conversion/relation.py."""

from __future__ import annotations

import pytest

from tsintervalkit.conversion.relation import interval_relation
from tsintervalkit.core.interval import IRREGULAR, TimeInterval


def _rel(source: str, target: str) -> int:
    return interval_relation(TimeInterval.parse(source), TimeInterval.parse(target))


class TestIntervalRelation:
    """Signed ratio between intervals."""

    @pytest.mark.parametrize(
        ("source", "target", "expected"),
        [
            ("1Hour", "1Day", -24),
            ("15Minute", "1Hour", -4),
            ("Day", "Month", -30),
            ("Month", "Year", -12),
            ("1Day", "1Hour", 24),
            ("6Hour", "1Hour", 6),
            ("Year", "Month", 12),
            ("1Hour", "60Minute", 1),
            ("Day", "Day", 1),
        ],
    )
    def test_ratios(self, source, target, expected):
        assert _rel(source, target) == expected

    def test_incompatible(self):
        assert _rel("60Minute", "7Minute") == 0
        assert _rel("7Minute", "1Hour") == 0

    def test_irregular_source(self):
        assert interval_relation(IRREGULAR, TimeInterval.parse("1Day")) == -1

    def test_irregular_target(self):
        assert interval_relation(TimeInterval.parse("1Hour"), IRREGULAR) == 1

    def test_both_irregular(self):
        assert interval_relation(IRREGULAR, IRREGULAR) == 1
