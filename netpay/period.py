from __future__ import annotations

import math
from enum import Enum

from netpay.engine import MONTHS_PER_YEAR

_CURRENCY_MARKERS = ("gh₵", "ghs", "ghc", "₵", "¢")
_ANNUAL_ALIASES = {"annual", "annually", "yearly", "year", "y", "a"}


class Period(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


def parse_period(text: str | None) -> Period:
    if text is None:
        return Period.MONTHLY
    if text.strip().lower() in _ANNUAL_ALIASES:
        return Period.ANNUAL
    return Period.MONTHLY


def to_monthly(amount: float, period: Period) -> float:
    if period is Period.ANNUAL:
        return amount / MONTHS_PER_YEAR
    return amount


def parse_income(text: str | float | None) -> float:
    """Turn whatever the income box holds into a non-negative finite float.

    Anything unusable (blank, garbage, negative, inf/nan) becomes ``0.0``.
    """
    if text is None:
        return 0.0
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        cleaned = text.strip().lower()
        for marker in _CURRENCY_MARKERS:
            cleaned = cleaned.replace(marker, "")
        cleaned = cleaned.replace(",", "").replace(" ", "").replace("_", "")
        try:
            value = float(cleaned)
        except ValueError:
            return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def monthly_income(text: str | float | None, period: Period) -> float:
    return to_monthly(parse_income(text), period)


__all__ = ["Period", "monthly_income", "parse_income", "parse_period", "to_monthly"]
