import math
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RateStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class RateSnapshot(BaseModel):
    """Point-in-time copy of provider rates, all relative to one base currency.

    Snapshots are never mutated; a refresh builds a new one and swaps it in.
    """

    model_config = ConfigDict(frozen=True)

    status: RateStatus
    base: str = "USD"
    rates: dict[str, float] = Field(default_factory=dict)
    time_last_update_utc: str | None = None
    time_next_update_utc: str | None = None
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        return self.status is RateStatus.SUCCESS

    def rate_for(self, currency: str) -> float | None:
        currency = currency.upper()
        if currency == self.base:
            return 1.0
        return self.rates.get(currency)


def clean_rates(raw: dict) -> dict[str, float]:
    """Keep only positive finite numeric rates, keyed by upper-case code."""
    rates: dict[str, float] = {}
    for code, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        value = float(value)
        if math.isfinite(value) and value > 0:
            rates[str(code).upper()] = value
    return rates
