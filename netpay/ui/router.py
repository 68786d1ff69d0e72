from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from netpay.api.deps import compute_for_input, resolve_holder, resolve_provider
from netpay.period import Period

router = APIRouter(prefix="/ui", tags=["ui"])

UI_ROOT = Path(__file__).resolve().parent
TEMPLATES = Jinja2Templates(directory=str(UI_ROOT / "templates"))
STATIC_ROOT = UI_ROOT / "static"
CURRENCY_SYMBOL = "GH₵"


def format_cedis(value: float | int) -> str:
    if value < 0:
        return f"-{CURRENCY_SYMBOL}{abs(value):,.2f}"
    return f"{CURRENCY_SYMBOL}{value:,.2f}"


def format_percent(rate: float) -> str:
    return f"{rate * 100:.1f}%"


TEMPLATES.env.filters["cedis"] = format_cedis
TEMPLATES.env.filters["percent"] = format_percent


@router.get("/static/{path:path}", name="ui_static")
async def serve_ui_static(path: str) -> FileResponse:
    target_path = (STATIC_ROOT / path).resolve()
    try:
        target_path.relative_to(STATIC_ROOT.resolve())
    except ValueError as exc:
        raise HTTPException(status_code=404, detail="Static asset not found") from exc
    if not target_path.is_file():
        raise HTTPException(status_code=404, detail="Static asset not found")
    return FileResponse(target_path)


def _page_context(request: Request, income: str | None, period: str | None, show_breakdown: bool) -> dict[str, Any]:
    holder = resolve_holder(request)
    table = holder.current
    _, selected, monthly, result = compute_for_input(income, period, table)
    return {
        "income": income or "",
        "period": selected.value,
        "is_annual": selected is Period.ANNUAL,
        "monthly_gross": monthly,
        "rates": table,
        "loading": holder.loading,
        "result": result,
        "show_breakdown": show_breakdown,
    }


@router.get("/", response_class=HTMLResponse)
async def calculator_page(
    request: Request,
    income: str | None = None,
    period: str | None = None,
    breakdown: bool = False,
) -> HTMLResponse:
    context = _page_context(request, income, period, breakdown)
    return TEMPLATES.TemplateResponse(request, "index.html", context)


@router.post("/refresh", response_class=RedirectResponse)
async def refresh_rates_page(request: Request) -> RedirectResponse:
    holder = resolve_holder(request)
    # button is disabled while loading; a double submit still resolves newest-wins
    await holder.refresh(resolve_provider(request))
    target = request.url_for("calculator_page")
    query = request.url.query
    return RedirectResponse(url=f"{target}?{query}" if query else str(target), status_code=303)
