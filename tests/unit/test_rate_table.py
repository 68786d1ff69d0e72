import pytest
from pydantic import ValidationError

from netpay.rates import (
    DEFAULT_GHANA_TAX_RATES,
    DEFAULT_MANDATORY_RATE,
    RateTable,
    TaxBracket,
)


def test_default_table_shape():
    table = DEFAULT_GHANA_TAX_RATES
    assert table.mandatory_rate == DEFAULT_MANDATORY_RATE == 0.055
    assert table.period_label == "2024/2025"
    assert table.provenance is None
    assert not table.is_live
    assert [b.limit for b in table.brackets] == [490, 110, 130, 3160, 16110, 45000, None]
    assert [b.rate for b in table.brackets] == [0, 0.05, 0.10, 0.175, 0.25, 0.30, 0.35]


def test_bracket_labels():
    assert DEFAULT_GHANA_TAX_RATES.bracket_labels()[:2] == ["Next 490", "Next 110"]
    assert DEFAULT_GHANA_TAX_RATES.bracket_labels()[-1] == "Above previous"
    assert TaxBracket(limit=12.5, rate=0.1).label == "Next 12.5"


def test_table_is_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_GHANA_TAX_RATES.period_label = "2030"  # type: ignore[misc]


def test_tables_compare_by_value():
    rebuilt = RateTable.model_validate(DEFAULT_GHANA_TAX_RATES.model_dump())
    assert rebuilt == DEFAULT_GHANA_TAX_RATES
    assert rebuilt is not DEFAULT_GHANA_TAX_RATES


def test_ordering_is_trusted():
    table = RateTable(
        mandatory_rate=0,
        brackets=[{"limit": 10, "rate": 0.3}, {"limit": 5, "rate": 0.1}, {"limit": None, "rate": 0.2}],
        period_label="odd",
    )
    assert [b.rate for b in table.brackets] == [0.3, 0.1, 0.2]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mandatory_rate": 0.05, "brackets": [], "period_label": "x"},
        {"mandatory_rate": 0.05, "brackets": [{"limit": 100, "rate": 0.1}], "period_label": "x"},
        {"mandatory_rate": 1.5, "brackets": [{"limit": None, "rate": 0.1}], "period_label": "x"},
        {"mandatory_rate": 0.05, "brackets": [{"limit": None, "rate": -0.1}], "period_label": "x"},
        {"mandatory_rate": 0.05, "brackets": [{"limit": -5, "rate": 0.1}, {"limit": None, "rate": 0.1}], "period_label": "x"},
        {"mandatory_rate": 0.05, "brackets": [{"limit": None, "rate": 17.5}], "period_label": "x"},
    ],
)
def test_malformed_tables_rejected(kwargs):
    with pytest.raises(ValidationError):
        RateTable(**kwargs)
