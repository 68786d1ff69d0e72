from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic import ConfigDict, field_validator

ENV_BOOL_TRUE = {"1", "true", "yes", "on"}

DEFAULT_RATES_MODEL = "gemini-3-flash-preview"
DEFAULT_RATES_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"
MIN_RATES_TIMEOUT = 1.0
MAX_RATES_TIMEOUT = 120.0


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ENV_BOOL_TRUE


def _env_optional(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class RateSourceProfile:
    model: str
    endpoint: str
    jurisdiction: str
    tax_year: str
    timeout: float


class Settings(BaseModel):
    gemini_api_key: str | None = Field(default_factory=lambda: _env_optional("GEMINI_API_KEY"), repr=False)
    rates_model: str = Field(default_factory=lambda: os.getenv("RATES_MODEL", DEFAULT_RATES_MODEL))
    rates_endpoint: str = Field(default_factory=lambda: os.getenv("RATES_ENDPOINT", DEFAULT_RATES_ENDPOINT))
    rates_jurisdiction: str = Field(default_factory=lambda: os.getenv("RATES_JURISDICTION", "Ghana"))
    rates_tax_year: str = Field(default_factory=lambda: os.getenv("RATES_TAX_YEAR", "2025"))
    rates_timeout: float = Field(default_factory=lambda: float(os.getenv("RATES_TIMEOUT", "20")))
    rates_fetch_on_startup: bool = Field(
        default_factory=lambda: _env_bool("RATES_FETCH_ON_STARTUP", True)
    )
    log_dir: str | None = Field(default_factory=lambda: _env_optional("LOG_DIR"))
    build_version: str = Field(default_factory=lambda: os.getenv("BUILD_VERSION", "dev"))
    build_sha: str = Field(default_factory=lambda: os.getenv("BUILD_SHA", "local"))

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("gemini_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: str | None) -> str | None:
        if value is None or not str(value).strip():
            return None
        return str(value).strip()

    @field_validator("rates_endpoint")
    @classmethod
    def _strip_endpoint(cls, value: str) -> str:
        stripped = value.strip().rstrip("/")
        if not stripped:
            raise ValueError("RATES_ENDPOINT must not be empty")
        return stripped

    @field_validator("rates_timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("RATES_TIMEOUT must be positive")
        return min(max(value, MIN_RATES_TIMEOUT), MAX_RATES_TIMEOUT)

    @property
    def live_rates_enabled(self) -> bool:
        return self.gemini_api_key is not None

    def rate_source_profile(self) -> RateSourceProfile:
        return RateSourceProfile(
            model=self.rates_model,
            endpoint=self.rates_endpoint,
            jurisdiction=self.rates_jurisdiction,
            tax_year=self.rates_tax_year,
            timeout=self.rates_timeout,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
