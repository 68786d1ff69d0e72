import logging

from fastapi import FastAPI, Request

from netpay import __version__
from netpay.api.deps import (
    compute_for_input,
    rate_table_payload,
    resolve_holder,
    resolve_provider,
    resolve_settings,
)
from netpay.lifespan import build_application_lifespan
from netpay.ui import router as ui_router

logger = logging.getLogger("netpay")


async def _announce_rate_source(app: FastAPI) -> None:
    settings = app.state.settings
    logger.info(
        "Net pay calculator ready; live_rates=%s jurisdiction=%s tax_year=%s",
        settings.live_rates_enabled,
        settings.rates_jurisdiction,
        settings.rates_tax_year,
    )


app = FastAPI(
    title="Ghana Net Pay Calculator",
    description="Monthly take-home pay after SSNIT and graduated PAYE. Annual figures are divided by 12 before computing.",
    version=__version__,
    lifespan=build_application_lifespan("calculator", startup_hook=_announce_rate_source),
)
app.include_router(ui_router)


@app.get("/health")
def health(request: Request):
    settings = resolve_settings(request)
    holder = resolve_holder(request)
    return {
        "status": "ok",
        "build": {
            "version": settings.build_version,
            "sha": settings.build_sha,
            "live_rates_enabled": settings.live_rates_enabled,
        },
        "rates": {
            "period_label": holder.current.period_label,
            "provenance": holder.current.provenance,
            "loading": holder.loading,
        },
    }


@app.get("/rates")
def current_rates(request: Request):
    holder = resolve_holder(request)
    return rate_table_payload(holder.current, holder)


@app.post("/rates/refresh")
async def refresh_rates(request: Request):
    holder = resolve_holder(request)
    provider = resolve_provider(request)
    await holder.refresh(provider)
    return rate_table_payload(holder.current, holder)


@app.get("/tax/compute")
def compute_tax(request: Request, income: str | None = None, period: str | None = None):
    holder = resolve_holder(request)
    table = holder.current
    entered, selected, monthly, result = compute_for_input(income, period, table)
    return {
        "income_entered": entered,
        "period": selected.value,
        "monthly_gross_income": monthly,
        "rates": {
            "period_label": table.period_label,
            "mandatory_rate": table.mandatory_rate,
            "provenance": table.provenance,
        },
        "result": result.as_dict(),
    }
