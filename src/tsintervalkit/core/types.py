"""Enumerations shared by the conversion engine.

All enums accept case-insensitive names and the legacy spellings found in
older command files (``SetToZero``, ``Instantaneous`` ...).
"""

from __future__ import annotations

from enum import StrEnum


def _lookup(enum_cls: type[StrEnum], value: object, aliases: dict[str, str]) -> StrEnum | None:
    if not isinstance(value, str):
        return None
    key = value.strip().lower().replace("_", "").replace(" ", "")
    key = aliases.get(key, key)
    for member in enum_cls:
        if member.value.lower() == key or member.name.lower().replace("_", "") == key:
            return member
    return None


class TimeScale(StrEnum):
    """What a single sample represents."""

    INST = "INST"
    """Point-in-time reading."""

    MEAN = "MEAN"
    """Average over the interval the sample covers."""

    ACCM = "ACCM"
    """Total accumulated over the interval the sample covers."""

    @classmethod
    def _missing_(cls, value: object) -> TimeScale | None:
        return _lookup(
            cls,
            value,
            {
                "instantaneous": "inst",
                "accumulated": "accm",
                "accumulation": "accm",
                "total": "accm",
                "average": "mean",
            },
        )


class IntervalBase(StrEnum):
    """Base unit of an interval, ordered from finest to coarsest."""

    MINUTE = "Minute"
    HOUR = "Hour"
    DAY = "Day"
    MONTH = "Month"
    YEAR = "Year"
    IRREGULAR = "Irregular"

    @property
    def rank(self) -> int:
        """Ordering key; irregular sorts before every regular unit."""
        return _BASE_RANK[self]

    @classmethod
    def _missing_(cls, value: object) -> IntervalBase | None:
        return _lookup(
            cls,
            value,
            {
                "min": "minute",
                "minutes": "minute",
                "h": "hour",
                "hr": "hour",
                "hours": "hour",
                "d": "day",
                "days": "day",
                "mon": "month",
                "months": "month",
                "y": "year",
                "yr": "year",
                "years": "year",
                "irreg": "irregular",
            },
        )


_BASE_RANK: dict[IntervalBase, int] = {
    IntervalBase.IRREGULAR: 0,
    IntervalBase.MINUTE: 1,
    IntervalBase.HOUR: 2,
    IntervalBase.DAY: 3,
    IntervalBase.MONTH: 4,
    IntervalBase.YEAR: 5,
}


class MissingInputPolicy(StrEnum):
    """How a missing source sample is treated while converting."""

    KEEP_MISSING = "KeepMissing"
    """The sample stays missing and counts against the missing threshold."""

    ZERO_FILL = "ZeroFill"
    """Counter-style data: no report means nothing accumulated."""

    PERSIST = "Persist"
    """Hold the last present reading."""

    @classmethod
    def _missing_(cls, value: object) -> MissingInputPolicy | None:
        return _lookup(
            cls,
            value,
            {"settozero": "zerofill", "zero": "zerofill", "repeat": "persist"},
        )


class OutputFillMethod(StrEnum):
    """How values are spread when one source interval covers many targets."""

    REPEAT = "Repeat"
    INTERPOLATE = "Interpolate"

    @classmethod
    def _missing_(cls, value: object) -> OutputFillMethod | None:
        return _lookup(cls, value, {})


class EndpointHandling(StrEnum):
    """Treatment of INST samples on the boundaries of a MEAN target interval."""

    INCLUDE_FIRST_ONLY = "IncludeFirstOnly"
    """Plain mean of the samples that start inside the interval."""

    AVERAGE_ENDPOINTS = "AverageEndpoints"
    """Replace the opening sample by the mean of both boundary samples."""

    @classmethod
    def _missing_(cls, value: object) -> EndpointHandling | None:
        return _lookup(cls, value, {})


class ChangeIntervalStatistic(StrEnum):
    """Statistic used instead of point sampling for INST to INST aggregation."""

    MAX = "Max"
    MIN = "Min"

    @classmethod
    def _missing_(cls, value: object) -> ChangeIntervalStatistic | None:
        return _lookup(cls, value, {"maximum": "max", "minimum": "min"})


class YearType(StrEnum):
    """Twelve-month period a yearly output value covers.

    Years are labelled by the calendar year in which they end, except
    ``YearMayToApr`` which is labelled by the year in which it starts.
    """

    CALENDAR = "Calendar"
    """January to December."""

    WATER = "Water"
    """October of the previous year to September."""

    NOV_TO_OCT = "NovToOct"
    FEB_TO_JAN_YEAR = "FebToJanYear"
    MAR_TO_FEB_YEAR = "MarToFebYear"
    APR_TO_MAR_YEAR = "AprToMarYear"
    MAY_TO_APR_YEAR = "MayToAprYear"
    JUN_TO_MAY_YEAR = "JunToMayYear"
    JUL_TO_JUN_YEAR = "JulToJunYear"
    AUG_TO_JUL_YEAR = "AugToJulYear"
    SEP_TO_AUG_YEAR = "SepToAugYear"
    OCT_TO_SEP_YEAR = "OctToSepYear"
    NOV_TO_OCT_YEAR = "NovToOctYear"
    DEC_TO_NOV_YEAR = "DecToNovYear"

    YEAR_MAY_TO_APR = "YearMayToApr"
    """May to April of the following year."""

    @property
    def start_month(self) -> int:
        """Calendar month (1-12) in which the year starts."""
        return _YEAR_START[self][1]

    @property
    def start_year_offset(self) -> int:
        """Offset from the label year to the calendar year the year starts in."""
        return _YEAR_START[self][0]

    @classmethod
    def _missing_(cls, value: object) -> YearType | None:
        return _lookup(cls, value, {"wateryear": "water", "wy": "water"})


# (start year offset, start month)
_YEAR_START: dict[YearType, tuple[int, int]] = {
    YearType.CALENDAR: (0, 1),
    YearType.WATER: (-1, 10),
    YearType.NOV_TO_OCT: (-1, 11),
    YearType.FEB_TO_JAN_YEAR: (-1, 2),
    YearType.MAR_TO_FEB_YEAR: (-1, 3),
    YearType.APR_TO_MAR_YEAR: (-1, 4),
    YearType.MAY_TO_APR_YEAR: (-1, 5),
    YearType.JUN_TO_MAY_YEAR: (-1, 6),
    YearType.JUL_TO_JUN_YEAR: (-1, 7),
    YearType.AUG_TO_JUL_YEAR: (-1, 8),
    YearType.SEP_TO_AUG_YEAR: (-1, 9),
    YearType.OCT_TO_SEP_YEAR: (-1, 10),
    YearType.NOV_TO_OCT_YEAR: (-1, 11),
    YearType.DEC_TO_NOV_YEAR: (-1, 12),
    YearType.YEAR_MAY_TO_APR: (0, 5),
}
