import asyncio
import logging

import httpx

from config import Settings
from services.cache_service import TTLCache
from services.country_service import CountryTable, NameResolver, make_resolver
from services.geography_service import GeographyService
from services.rate_service import RateFetcher, RateStore
from services.selection_service import Phase, SelectionEngine
from utils.http_client import FetchError, make_client

logger = logging.getLogger(__name__)


class AppContext:
    """Everything one running app owns: table, rate store, map and selection."""

    def __init__(
        self,
        settings: Settings,
        table: CountryTable | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings
        self.table = table or CountryTable.from_file()
        self.resolver: NameResolver = make_resolver(self.table, settings.name_matching)
        self.client = client or make_client(settings.http_timeout_seconds)
        self.store = RateStore()
        self.fetcher = RateFetcher(
            self.client,
            settings.rates_url,
            base=settings.base_currency,
            retries=settings.rates_fetch_retries,
            backoff=settings.rates_fetch_backoff_seconds,
        )
        self.geography = GeographyService(
            self.client,
            settings.world_atlas_url,
            self.resolver,
            object_name=settings.topology_object,
            cache=TTLCache(ttl=settings.cache_ttl_seconds),
        )
        self.selection = SelectionEngine(
            self.resolver,
            self.store,
            convention=settings.number_locale,
            flag_cdn_url=settings.flag_cdn_url,
            base_currency=settings.base_currency,
        )
        self._refresh_task: asyncio.Task | None = None

    async def refresh_rates(self) -> bool:
        """Refresh the store, keeping the previous snapshot on failure."""
        try:
            await self.store.refresh(self.fetcher)
        except FetchError as e:
            logger.warning("Rate refresh failed (%s): %s", e.kind.value, e)
            return False
        return True

    async def load_geography(self) -> bool:
        try:
            await self.geography.load()
        except FetchError as e:
            logger.error("Base map load failed (%s): %s", e.kind.value, e)
            return False
        return True

    async def startup(self) -> None:
        self.selection.phase = Phase.LOADING
        await self.refresh_rates()
        # The map is the navigation surface; without it the session is unusable
        if not await self.load_geography():
            self.selection.phase = Phase.FAILED
            return
        self.selection.phase = Phase.READY

        if self.settings.default_country:
            self.selection.select(self.settings.default_country)

        if self.settings.rates_refresh_seconds > 0:
            self._refresh_task = asyncio.create_task(
                self._refresh_loop(self.settings.rates_refresh_seconds)
            )

    async def _refresh_loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            await self.refresh_rates()

    async def shutdown(self) -> None:
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            try:
                await self._refresh_task
            except asyncio.CancelledError:
                pass
            self._refresh_task = None
        await self.client.aclose()
