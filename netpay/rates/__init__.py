from netpay.rates.defaults import (
    DEFAULT_GHANA_TAX_RATES,
    DEFAULT_MANDATORY_RATE,
    DEFAULT_PERIOD_LABEL,
    LIVE_PERIOD_LABEL,
    LIVE_PROVENANCE,
)
from netpay.rates.errors import RateFetchError, RateResponseError
from netpay.rates.models import RateTable, TaxBracket
from netpay.rates.parse import parse_rate_payload
from netpay.rates.provider import FallbackRateProvider, GeminiRateSource, build_rate_provider
from netpay.rates.state import RateTableHolder

__all__ = [
    "DEFAULT_GHANA_TAX_RATES",
    "DEFAULT_MANDATORY_RATE",
    "DEFAULT_PERIOD_LABEL",
    "FallbackRateProvider",
    "GeminiRateSource",
    "LIVE_PERIOD_LABEL",
    "LIVE_PROVENANCE",
    "RateFetchError",
    "RateResponseError",
    "RateTable",
    "RateTableHolder",
    "TaxBracket",
    "build_rate_provider",
    "parse_rate_payload",
]
