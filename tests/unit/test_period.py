import math

import pytest

from netpay.period import Period, monthly_income, parse_income, parse_period, to_monthly


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("5000", 5000.0),
        ("  5,000.50 ", 5000.5),
        ("GH₵ 1,200", 1200.0),
        ("₵750", 750.0),
        ("GHS 300", 300.0),
        (4200, 4200.0),
        ("", 0.0),
        ("abc", 0.0),
        ("-100", 0.0),
        ("inf", 0.0),
        ("nan", 0.0),
        (float("inf"), 0.0),
        (None, 0.0),
    ],
)
def test_parse_income(raw, expected):
    assert parse_income(raw) == expected


def test_parse_period():
    assert parse_period("annual") is Period.ANNUAL
    assert parse_period(" Yearly ") is Period.ANNUAL
    assert parse_period("monthly") is Period.MONTHLY
    assert parse_period("weekly") is Period.MONTHLY
    assert parse_period(None) is Period.MONTHLY


def test_annual_divided_by_twelve_without_rounding():
    assert to_monthly(60_000, Period.ANNUAL) == 5_000
    assert to_monthly(100, Period.ANNUAL) == 100 / 12
    assert to_monthly(100, Period.MONTHLY) == 100


def test_monthly_income_combines_parse_and_period():
    assert monthly_income("12,000", Period.ANNUAL) == 1_000
    assert monthly_income("junk", Period.ANNUAL) == 0
    assert not math.isnan(monthly_income("nan", Period.MONTHLY))
