"""Exchange rates from open.er-api.com (free, no API key required)."""

import logging

import httpx

from models.rates import RateSnapshot, RateStatus, clean_rates
from utils.http_client import FetchError, FetchErrorKind, get_json

logger = logging.getLogger(__name__)


class RateFetcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        base: str = "USD",
        retries: int = 0,
        backoff: float = 0.5,
    ):
        self.client = client
        self.url = url
        self.base = base
        self.retries = retries
        self.backoff = backoff

    async def fetch(self) -> RateSnapshot:
        data = await get_json(
            self.client, self.url, no_cache=True, retries=self.retries, backoff=self.backoff
        )
        return parse_snapshot(data, self.base)


def parse_snapshot(data, base: str = "USD") -> RateSnapshot:
    """Build a snapshot from an open.er-api.com ``latest`` payload."""
    if not isinstance(data, dict) or not isinstance(data.get("rates"), dict):
        raise FetchError(FetchErrorKind.MALFORMED_RESPONSE, "rates payload has no 'rates' mapping")

    status = RateStatus.SUCCESS if data.get("result") == "success" else RateStatus.FAILURE
    return RateSnapshot(
        status=status,
        base=base,
        rates=clean_rates(data["rates"]),
        time_last_update_utc=_opt_str(data.get("time_last_update_utc")),
        time_next_update_utc=_opt_str(data.get("time_next_update_utc")),
    )


def _opt_str(value) -> str | None:
    if value is None:
        return None
    return str(value)


class RateStore:
    """Holds the latest snapshot; replaced wholesale, never merged."""

    def __init__(self, snapshot: RateSnapshot | None = None):
        self._snapshot = snapshot

    @property
    def snapshot(self) -> RateSnapshot | None:
        return self._snapshot

    def replace(self, snapshot: RateSnapshot) -> None:
        self._snapshot = snapshot

    async def refresh(self, fetcher: RateFetcher) -> RateSnapshot:
        """Fetch and swap in a new snapshot.

        On FetchError the previous snapshot (or None) is left in place and the
        error propagates to the caller.
        """
        snapshot = await fetcher.fetch()
        self._snapshot = snapshot
        logger.info(
            "Rates refreshed: status=%s, %d currencies, last update %s",
            snapshot.status.value, len(snapshot.rates), snapshot.time_last_update_utc,
        )
        return snapshot
