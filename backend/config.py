import json

from pydantic_settings import BaseSettings
from pydantic import field_validator
from pathlib import Path

NAME_MATCHING_STRATEGIES = ("exact", "casefold", "alias")
NUMBER_LOCALES = ("en", "es")


class Settings(BaseSettings):
    app_name: str = "SudFX"
    version: str = "0.1.0"
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    cache_ttl_seconds: int = 300
    log_level: str = "INFO"

    world_atlas_url: str = "https://cdn.jsdelivr.net/npm/world-atlas@2/countries-110m.json"
    topology_object: str = "countries"
    # Open Access ExchangeRate-API, no key required
    rates_api_url: str = "https://open.er-api.com/v6/latest"
    base_currency: str = "USD"
    http_timeout_seconds: float = 10.0
    rates_refresh_seconds: float = 600
    rates_fetch_retries: int = 0
    rates_fetch_backoff_seconds: float = 0.5

    name_matching: str = "exact"
    number_locale: str = "en"
    default_country: str | None = None
    flag_cdn_url: str = "https://flagcdn.com/w40"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            # Accept JSON array or comma-separated string
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("base_currency")
    @classmethod
    def normalize_base_currency(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError(f"base_currency must be an ISO-4217 code, got {v!r}")
        return v

    @field_validator("name_matching")
    @classmethod
    def check_name_matching(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in NAME_MATCHING_STRATEGIES:
            raise ValueError(f"name_matching must be one of {NAME_MATCHING_STRATEGIES}")
        return v

    @field_validator("number_locale")
    @classmethod
    def check_number_locale(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in NUMBER_LOCALES:
            raise ValueError(f"number_locale must be one of {NUMBER_LOCALES}")
        return v

    @field_validator("rates_refresh_seconds", "rates_fetch_retries")
    @classmethod
    def non_negative(cls, v):
        if v < 0:
            raise ValueError("must be zero or positive")
        return v

    @property
    def rates_url(self) -> str:
        return f"{self.rates_api_url.rstrip('/')}/{self.base_currency}"

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent / ".env"),
        "env_file_encoding": "utf-8",
    }


settings = Settings()
