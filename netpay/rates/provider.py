from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import httpx

from netpay.config import RateSourceProfile, Settings
from netpay.rates.defaults import DEFAULT_GHANA_TAX_RATES
from netpay.rates.errors import RateFetchError
from netpay.rates.models import RateTable
from netpay.rates.parse import extract_candidate_text, parse_rate_payload

logger = logging.getLogger("netpay.rates")

PROMPT_TEMPLATE = (
    "What are the current monthly income tax (PAYE) brackets and SSNIT rates for employees "
    "in {jurisdiction} for the year {tax_year}? Provide the answer in a structured JSON format "
    "with 'ssnitRate' (as a decimal), 'year', and 'brackets' (an array of objects with 'limit' "
    "and 'rate'). Each 'limit' is the width of that bracket, not a cumulative threshold. "
    "If a bracket is 'above X', set limit to null."
)


class RateTableSource(Protocol):
    async def fetch(self) -> RateTable:
        ...


class GeminiRateSource:
    """Asks the Gemini generateContent API (with Google Search grounding) for the schedule."""

    def __init__(
        self,
        api_key: str,
        profile: RateSourceProfile,
        *,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.profile = profile
        self.client = client

    @property
    def url(self) -> str:
        return f"{self.profile.endpoint}/models/{self.profile.model}:generateContent"

    def build_request_body(self) -> dict[str, Any]:
        prompt = PROMPT_TEMPLATE.format(
            jurisdiction=self.profile.jurisdiction,
            tax_year=self.profile.tax_year,
        )
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "tools": [{"google_search": {}}],
            "generationConfig": {"responseMimeType": "application/json"},
        }

    async def _post(self, client: httpx.AsyncClient) -> httpx.Response:
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        return await client.post(
            self.url,
            json=self.build_request_body(),
            headers=headers,
            timeout=self.profile.timeout,
        )

    async def fetch(self) -> RateTable:
        try:
            if self.client is not None:
                response = await self._post(self.client)
            else:
                async with httpx.AsyncClient(timeout=self.profile.timeout) as client:
                    response = await self._post(client)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RateFetchError(
                f"rate service answered {exc.response.status_code} for {self.profile.model}"
            ) from exc
        except httpx.HTTPError as exc:
            raise RateFetchError(f"rate service unreachable: {exc!r}") from exc

        text = extract_candidate_text(response.json())
        return parse_rate_payload(text)


class FallbackRateProvider:
    """Wraps a :class:`RateTableSource` so that ``fetch_current`` never raises.

    With no source configured the fallback table is returned straight away.
    """

    def __init__(
        self,
        source: RateTableSource | None = None,
        *,
        fallback: RateTable = DEFAULT_GHANA_TAX_RATES,
        timeout: float | None = None,
    ):
        self.source = source
        self.fallback = fallback
        self.timeout = timeout

    @property
    def live(self) -> bool:
        return self.source is not None

    async def fetch_current(self) -> RateTable:
        if self.source is None:
            return self.fallback
        try:
            table = await asyncio.wait_for(self.source.fetch(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Live rate fetch timed out after %ss; using fallback table", self.timeout)
            return self.fallback
        except Exception as exc:
            logger.warning(
                "Live rate fetch failed (%r); using fallback table",
                exc,
                extra={"error": repr(exc), "fallback_period": self.fallback.period_label},
            )
            return self.fallback
        logger.info(
            "Loaded live rate table: period=%s brackets=%s provenance=%s",
            table.period_label,
            len(table.brackets),
            table.provenance,
        )
        return table


def build_rate_provider(
    settings: Settings,
    *,
    client: httpx.AsyncClient | None = None,
) -> FallbackRateProvider:
    profile = settings.rate_source_profile()
    if not settings.live_rates_enabled:
        logger.info("GEMINI_API_KEY not set; live rate fetching disabled")
        return FallbackRateProvider(None, timeout=profile.timeout)
    source = GeminiRateSource(settings.gemini_api_key or "", profile, client=client)
    # outer bound also covers parsing the reply
    return FallbackRateProvider(source, timeout=profile.timeout + 5.0)


__all__ = [
    "FallbackRateProvider",
    "GeminiRateSource",
    "PROMPT_TEMPLATE",
    "RateTableSource",
    "build_rate_provider",
]
