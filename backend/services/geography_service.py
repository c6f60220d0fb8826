import logging

import httpx

from models.presentation import MapPath, MapRender
from services import topology
from services.cache_service import TTLCache
from services.country_service import NameResolver
from services.projection import fit_mercator, svg_path
from utils.http_client import FetchError, FetchErrorKind, get_json

logger = logging.getLogger(__name__)


def filter_features(collection: dict, resolver: NameResolver) -> dict:
    """Keep only features whose ``name`` resolves against the reference table."""
    kept = [
        f for f in collection.get("features", [])
        if resolver.resolve((f.get("properties") or {}).get("name")) is not None
    ]
    dropped = len(collection.get("features", [])) - len(kept)
    logger.info("Map features: kept %d, dropped %d", len(kept), dropped)
    return {"type": "FeatureCollection", "features": kept}


class GeographyService:
    """Loads the base map once and re-projects it for any viewport size."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        resolver: NameResolver,
        object_name: str = "countries",
        cache: TTLCache | None = None,
    ):
        self.client = client
        self.url = url
        self.resolver = resolver
        self.object_name = object_name
        self._cache = cache or TTLCache()
        self._collection: dict | None = None

    @property
    def collection(self) -> dict | None:
        return self._collection

    @property
    def loaded(self) -> bool:
        return self._collection is not None

    async def load(self) -> dict:
        data = await get_json(self.client, self.url)
        try:
            everything = topology.feature(data, self.object_name)
        except topology.TopologyError as e:
            raise FetchError(FetchErrorKind.MALFORMED_RESPONSE, f"bad topology from {self.url}: {e}") from e
        if everything.get("type") != "FeatureCollection":
            everything = {"type": "FeatureCollection", "features": [everything]}

        self._collection = filter_features(everything, self.resolver)
        self._cache.clear()
        return self._collection

    def render(self, width: int, height: int, selected: str | None = None) -> MapRender:
        """Project the loaded features into SVG paths for a ``width`` x ``height`` box."""
        if self._collection is None:
            raise RuntimeError("geography not loaded")

        paths = self._cache.get((width, height))
        if paths is None:
            projection = fit_mercator(self._collection, width, height)
            paths = []
            for f in self._collection["features"]:
                name = f["properties"].get("name", "")
                paths.append((name, self._canonical(name), svg_path(f.get("geometry"), projection)))
            self._cache.set((width, height), paths)

        return MapRender(
            width=width,
            height=height,
            paths=[
                MapPath(name=name, d=d, selected=selected is not None and canonical == selected)
                for name, canonical, d in paths
            ],
        )

    def _canonical(self, name: str) -> str | None:
        info = self.resolver.resolve(name)
        return info.name if info else None
