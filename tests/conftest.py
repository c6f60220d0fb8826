from __future__ import annotations

import copy
import json

import httpx
import pytest

from config import Settings
from services.context import AppContext
from services.country_service import CountryTable
from utils.http_client import make_client

RATES_HOST = "open.er-api.com"
ATLAS_HOST = "cdn.jsdelivr.net"

RATES_PAYLOAD = {
    "result": "success",
    "base_code": "USD",
    "time_last_update_utc": "2025-01-01T00:00Z",
    "time_next_update_utc": "2025-01-02T00:00Z",
    "rates": {"USD": 1, "CLP": 950.23, "PEN": 3.7512, "EUR": 0.9123456, "ARS": 1045.5},
}

# Plain (unquantized) topology: Chile and Peru are in the reference table,
# Germany is not and must be filtered out.
TOPOLOGY = {
    "type": "Topology",
    "arcs": [
        [[-75, -50], [-70, -50], [-70, -20], [-75, -20], [-75, -50]],
        [[-80, -18], [-70, -18], [-70, 0], [-80, 0], [-80, -18]],
        [[6, 47], [15, 47], [15, 55], [6, 55], [6, 47]],
    ],
    "objects": {
        "countries": {
            "type": "GeometryCollection",
            "geometries": [
                {"type": "Polygon", "arcs": [[0]], "id": "152", "properties": {"name": "Chile"}},
                {"type": "MultiPolygon", "arcs": [[[1]]], "id": "604", "properties": {"name": "Peru"}},
                {"type": "Polygon", "arcs": [[2]], "id": "276", "properties": {"name": "Germany"}},
            ],
        }
    },
}


class FakeProviders:
    """Serves canned responses for both upstream providers and counts calls."""

    def __init__(self, rates=None, topology=None, rates_status=200, atlas_status=200):
        self.rates = copy.deepcopy(RATES_PAYLOAD) if rates is None else rates
        self.topology = copy.deepcopy(TOPOLOGY) if topology is None else topology
        self.rates_status = rates_status
        self.atlas_status = atlas_status
        self.calls: list[httpx.Request] = []

    def _body(self, payload) -> bytes:
        if isinstance(payload, (bytes, str)):
            return payload.encode() if isinstance(payload, str) else payload
        return json.dumps(payload).encode()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if request.url.host == RATES_HOST:
            return httpx.Response(self.rates_status, content=self._body(self.rates))
        if request.url.host == ATLAS_HOST:
            return httpx.Response(self.atlas_status, content=self._body(self.topology))
        return httpx.Response(404)

    def count(self, host: str) -> int:
        return sum(1 for r in self.calls if r.url.host == host)


@pytest.fixture()
def providers() -> FakeProviders:
    return FakeProviders()


@pytest.fixture()
def table() -> CountryTable:
    return CountryTable.from_file()


@pytest.fixture()
def make_context(table):
    def _make(providers: FakeProviders, **overrides) -> AppContext:
        overrides.setdefault("rates_refresh_seconds", 0)
        settings = Settings(**overrides)
        client = make_client(transport=httpx.MockTransport(providers))
        return AppContext(settings, table=table, client=client)

    return _make
