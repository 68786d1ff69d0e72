from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from netpay.rates.models import RateTable

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class BracketSlice:
    label: str
    rate: float
    taxed_amount: float
    tax_for_bracket: float


@dataclass(frozen=True)
class TaxResult:
    gross_income: float
    mandatory_deduction: float
    taxable_income: float
    total_tax: float
    net_income: float
    breakdown: tuple[BracketSlice, ...]

    @property
    def annual_net_income(self) -> float:
        return self.net_income * MONTHS_PER_YEAR

    @property
    def annual_total_tax(self) -> float:
        return self.total_tax * MONTHS_PER_YEAR

    @property
    def effective_rate(self) -> float:
        if not self.gross_income:
            return 0.0
        return (self.mandatory_deduction + self.total_tax) / self.gross_income

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["breakdown"] = [asdict(item) for item in self.breakdown]
        payload["annual_net_income"] = self.annual_net_income
        payload["annual_total_tax"] = self.annual_total_tax
        payload["effective_rate"] = self.effective_rate
        return payload


def compute(gross_income: float, rates: RateTable) -> TaxResult:
    """Deduct the mandatory contribution, then tax what is left slice by slice.

    ``gross_income`` is a single period's figure and is taken as-is; callers
    sanitize free-text input first (see :func:`netpay.period.parse_income`).
    Breakdown entries line up with ``rates.brackets`` and stop at the first
    bracket that receives nothing.
    """
    mandatory_deduction = gross_income * rates.mandatory_rate
    taxable_income = gross_income - mandatory_deduction

    remaining = taxable_income
    total_tax = 0.0
    breakdown: list[BracketSlice] = []
    for bracket in rates.brackets:
        if remaining <= 0:
            break
        if bracket.limit is None:
            amount = remaining
        else:
            amount = min(remaining, bracket.limit)
        tax = amount * bracket.rate
        total_tax += tax
        breakdown.append(
            BracketSlice(
                label=bracket.label,
                rate=bracket.rate,
                taxed_amount=amount,
                tax_for_bracket=tax,
            )
        )
        remaining -= amount

    return TaxResult(
        gross_income=gross_income,
        mandatory_deduction=mandatory_deduction,
        taxable_income=taxable_income,
        total_tax=total_tax,
        net_income=taxable_income - total_tax,
        breakdown=tuple(breakdown),
    )


__all__ = ["BracketSlice", "MONTHS_PER_YEAR", "TaxResult", "compute"]
