from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncContextManager

import httpx
from fastapi import FastAPI

from netpay.config import get_settings
from netpay.rates.provider import build_rate_provider
from netpay.rates.state import RateTableHolder

Hook = Callable[[FastAPI], Awaitable[None] | None]

_STATE_ATTRS = ("settings", "http_client", "rate_provider", "rate_holder", "log_handler", "app_label")


def _open_log_sink(logger: logging.Logger, log_dir: str | None, app_label: str) -> logging.Handler | None:
    if not log_dir:
        return None
    logs_dir = Path(log_dir)
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Unable to create logs directory %s: %s", logs_dir, exc)
        return None
    handler = logging.FileHandler(logs_dir / f"{app_label}.log", encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    project_logger = logging.getLogger("netpay")
    if project_logger.getEffectiveLevel() > logging.INFO:
        project_logger.setLevel(logging.INFO)
    project_logger.addHandler(handler)
    return handler


async def _invoke_hook(hook: Hook | None, app: FastAPI) -> None:
    if hook is None:
        return
    try:
        result = hook(app)
        if inspect.isawaitable(result):
            await result  # type: ignore[func-returns-value]
    except Exception:  # pragma: no cover - hooks are user provided
        logging.getLogger("netpay").exception("Application lifecycle hook failed")


def build_application_lifespan(
    app_label: str,
    *,
    startup_hook: Hook | None = None,
    shutdown_hook: Hook | None = None,
) -> Callable[[FastAPI], AsyncContextManager[None]]:
    base_logger = logging.getLogger("netpay")

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = get_settings()
        logger = base_logger.getChild(app_label)
        http_client = httpx.AsyncClient(timeout=settings.rates_timeout)
        provider = build_rate_provider(settings, client=http_client)
        holder = RateTableHolder()
        log_handler = _open_log_sink(logger, settings.log_dir, app_label)

        app.state.settings = settings
        app.state.http_client = http_client
        app.state.rate_provider = provider
        app.state.rate_holder = holder
        app.state.log_handler = log_handler
        app.state.app_label = app_label

        if settings.rates_fetch_on_startup:
            await holder.refresh(provider)

        logger.info(
            "Startup complete: live_rates=%s period=%s provenance=%s",
            provider.live,
            holder.current.period_label,
            holder.current.provenance,
        )

        try:
            await _invoke_hook(startup_hook, app)
            yield
        finally:
            await _invoke_hook(shutdown_hook, app)
            try:
                await http_client.aclose()
            except Exception as exc:  # pragma: no cover - defensive logging
                logger.warning("Failed to close shared httpx client: %s", exc)
            if log_handler is not None:
                logging.getLogger("netpay").removeHandler(log_handler)
                log_handler.close()
            for attr in _STATE_ATTRS:
                if hasattr(app.state, attr):
                    delattr(app.state, attr)
            logger.info("Shutdown complete")

    return _lifespan
