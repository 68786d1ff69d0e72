from __future__ import annotations

from netpay.rates.models import RateTable, TaxBracket

DEFAULT_MANDATORY_RATE = 0.055  # SSNIT employee tier
DEFAULT_PERIOD_LABEL = "2024/2025"
LIVE_PERIOD_LABEL = "2025"
LIVE_PROVENANCE = "Gemini Live Search"

# GRA monthly PAYE schedule; limits are slice widths in GHS.
DEFAULT_GHANA_BRACKETS = (
    TaxBracket(limit=490, rate=0.0),
    TaxBracket(limit=110, rate=0.05),
    TaxBracket(limit=130, rate=0.10),
    TaxBracket(limit=3160, rate=0.175),
    TaxBracket(limit=16110, rate=0.25),
    TaxBracket(limit=45000, rate=0.30),
    TaxBracket(limit=None, rate=0.35),
)

DEFAULT_GHANA_TAX_RATES = RateTable(
    mandatory_rate=DEFAULT_MANDATORY_RATE,
    brackets=DEFAULT_GHANA_BRACKETS,
    period_label=DEFAULT_PERIOD_LABEL,
)


__all__ = [
    "DEFAULT_GHANA_BRACKETS",
    "DEFAULT_GHANA_TAX_RATES",
    "DEFAULT_MANDATORY_RATE",
    "DEFAULT_PERIOD_LABEL",
    "LIVE_PERIOD_LABEL",
    "LIVE_PROVENANCE",
]
