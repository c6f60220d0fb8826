"""Spherical Mercator projection fitted to a viewport.

Equivalent to d3's ``geoMercator().fitSize([width, height], collection)``
for collections that do not cross the antimeridian.
"""

import math
from dataclasses import dataclass
from typing import Iterator

MAX_LATITUDE = 85.0511287798


@dataclass(frozen=True)
class MercatorProjection:
    scale: float
    tx: float
    ty: float

    def __call__(self, lon: float, lat: float) -> tuple[float, float]:
        x, y = _raw(lon, lat)
        return self.tx + self.scale * x, self.ty - self.scale * y


def _raw(lon: float, lat: float) -> tuple[float, float]:
    lat = max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))
    return math.radians(lon), math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))


def iter_rings(geometry: dict | None) -> Iterator[list[list[float]]]:
    """Yield every ring/line of a GeoJSON geometry."""
    if not geometry:
        return
    kind = geometry.get("type")
    coords = geometry.get("coordinates")
    if kind == "Polygon" or kind == "MultiLineString":
        yield from coords
    elif kind == "MultiPolygon":
        for polygon in coords:
            yield from polygon
    elif kind == "LineString" or kind == "MultiPoint":
        yield coords
    elif kind == "Point":
        yield [coords]
    elif kind == "GeometryCollection":
        for g in geometry.get("geometries", []):
            yield from iter_rings(g)


def fit_mercator(collection: dict, width: float, height: float) -> MercatorProjection:
    if width <= 0 or height <= 0:
        raise ValueError("viewport width and height must be positive")

    x0 = y0 = math.inf
    x1 = y1 = -math.inf
    for f in collection.get("features", []):
        for ring in iter_rings(f.get("geometry")):
            for p in ring:
                x, y = _raw(p[0], p[1])
                x0, x1 = min(x0, x), max(x1, x)
                y0, y1 = min(y0, y), max(y1, y)

    if x0 == math.inf:
        raise ValueError("cannot fit a projection to an empty collection")

    dx, dy = x1 - x0, y1 - y0
    candidates = [s for s in (width / dx if dx else None, height / dy if dy else None) if s]
    k = min(candidates) if candidates else 1.0
    # Screen y grows downward while Mercator y grows north
    return MercatorProjection(
        scale=k,
        tx=(width - k * (x0 + x1)) / 2,
        ty=(height + k * (y0 + y1)) / 2,
    )


def svg_path(geometry: dict | None, projection: MercatorProjection, precision: int = 2) -> str:
    parts: list[str] = []
    closed = bool(geometry) and geometry.get("type") in ("Polygon", "MultiPolygon")
    for ring in iter_rings(geometry):
        if not ring:
            continue
        points = [projection(p[0], p[1]) for p in ring]
        head, *rest = points
        parts.append(f"M{head[0]:.{precision}f},{head[1]:.{precision}f}")
        parts.extend(f"L{x:.{precision}f},{y:.{precision}f}" for x, y in rest)
        if closed:
            parts.append("Z")
    return "".join(parts)
