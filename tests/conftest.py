import pathlib
import sys

p = str(pathlib.Path(__file__).resolve().parents[1])
sys.path.insert(0, p) if p not in sys.path else None

import pytest  # noqa: E402

from netpay.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _no_live_rates(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("LOG_DIR", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
