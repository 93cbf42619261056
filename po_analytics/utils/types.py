"""Shared type definitions for the PO analytics package."""

from datetime import date
from enum import StrEnum


type RowValue = str | int | float | date | None
type ReportResult = dict[str, str | bool | int | list[str]]


class PeriodType(StrEnum):
    MONTH = "month"
    QUARTER = "quarter"
    HALF_YEAR = "halfYear"
    YEAR = "year"


class PriceScoringMode(StrEnum):
    FLAT = "flat"
    PROPORTIONAL = "proportional"


class TrendMetric(StrEnum):
    QTY = "qty"
    VALUE = "value"
    RATE = "rate"


def parse_period_type(value: str | PeriodType) -> PeriodType:
    """Resolve a user-supplied period name, accepting a few common spellings."""
    match str(value).strip():
        case "month" | "monthly" | "M":
            return PeriodType.MONTH
        case "quarter" | "quarterly" | "Q":
            return PeriodType.QUARTER
        case "halfYear" | "half_year" | "half-year" | "H":
            return PeriodType.HALF_YEAR
        case "year" | "yearly" | "Y":
            return PeriodType.YEAR
        case other:
            raise ValueError(f"Unknown period type: {other}")
