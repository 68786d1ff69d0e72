from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from netpay.rates.defaults import DEFAULT_MANDATORY_RATE, LIVE_PERIOD_LABEL, LIVE_PROVENANCE
from netpay.rates.errors import RateResponseError
from netpay.rates.models import RateTable

_FENCE = "```"


def _strip_code_fence(text: str) -> str:
    stripped = text.strip()
    if not stripped.startswith(_FENCE):
        return stripped
    body = stripped[len(_FENCE):]
    # drop an info string such as ```json
    newline = body.find("\n")
    body = body[newline + 1:] if newline != -1 else ""
    if body.rstrip().endswith(_FENCE):
        body = body.rstrip()[: -len(_FENCE)]
    return body.strip()


def extract_candidate_text(body: dict[str, Any]) -> str:
    """Join the text parts of the first candidate in a generateContent reply."""
    candidates = body.get("candidates") or []
    if not candidates:
        return ""
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def parse_rate_payload(text: str | None) -> RateTable:
    try:
        data = json.loads(_strip_code_fence(text or "") or "{}")
    except json.JSONDecodeError as exc:
        raise RateResponseError(f"rate reply is not JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise RateResponseError("rate reply is not a JSON object")

    brackets = data.get("brackets")
    if not isinstance(brackets, list):
        raise RateResponseError("rate reply has no brackets array")

    mandatory_rate = data.get("ssnitRate") or data.get("mandatoryRate") or DEFAULT_MANDATORY_RATE
    period_label = data.get("year") or LIVE_PERIOD_LABEL
    try:
        return RateTable(
            mandatory_rate=mandatory_rate,
            brackets=brackets,
            period_label=str(period_label),
            provenance=LIVE_PROVENANCE,
        )
    except ValidationError as exc:
        raise RateResponseError(f"rate reply has a malformed table: {exc.error_count()} error(s)") from exc


__all__ = ["extract_candidate_text", "parse_rate_payload"]
