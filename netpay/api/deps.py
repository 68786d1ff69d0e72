from __future__ import annotations

from typing import Any

from fastapi import Request

from netpay.config import Settings, get_settings
from netpay.engine import TaxResult, compute
from netpay.period import Period, parse_income, parse_period, to_monthly
from netpay.rates.models import RateTable
from netpay.rates.provider import FallbackRateProvider, build_rate_provider
from netpay.rates.state import RateTableHolder


def resolve_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if isinstance(settings, Settings):
        return settings
    return get_settings()


def resolve_holder(request: Request) -> RateTableHolder:
    holder = getattr(request.app.state, "rate_holder", None)
    if not isinstance(holder, RateTableHolder):
        holder = RateTableHolder()
        request.app.state.rate_holder = holder
    return holder


def resolve_provider(request: Request) -> FallbackRateProvider:
    provider = getattr(request.app.state, "rate_provider", None)
    if provider is None:
        client = getattr(request.app.state, "http_client", None)
        provider = build_rate_provider(resolve_settings(request), client=client)
        request.app.state.rate_provider = provider
    return provider


def rate_table_payload(table: RateTable, holder: RateTableHolder | None = None) -> dict[str, Any]:
    payload = table.model_dump(mode="json")
    payload["brackets"] = [
        {**bracket, "label": label}
        for bracket, label in zip(payload["brackets"], table.bracket_labels())
    ]
    payload["live"] = table.is_live
    if holder is not None:
        payload["loading"] = holder.loading
        payload["refreshed_at"] = holder.refreshed_at.isoformat() if holder.refreshed_at else None
    return payload


def compute_for_input(income: str | None, period: str | None, table: RateTable) -> tuple[float, Period, float, TaxResult]:
    entered = parse_income(income)
    selected = parse_period(period)
    monthly = to_monthly(entered, selected)
    return entered, selected, monthly, compute(monthly, table)
