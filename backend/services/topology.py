"""TopoJSON -> GeoJSON conversion.

Handles quantized (delta-encoded) and plain arcs, reversed arc references
(negative indexes, ``~i``) and every TopoJSON geometry type.
"""

from typing import Any

Position = list[float]


class TopologyError(ValueError):
    pass


class _Decoder:
    def __init__(self, topology: dict):
        arcs = topology.get("arcs")
        if not isinstance(arcs, list):
            raise TopologyError("topology has no 'arcs' list")
        transform = topology.get("transform")
        if transform:
            try:
                self._scale = [float(v) for v in transform["scale"]]
                self._translate = [float(v) for v in transform["translate"]]
            except (KeyError, TypeError, ValueError) as e:
                raise TopologyError(f"invalid topology transform: {e}") from e
        else:
            self._scale = None
            self._translate = None
        self._arcs = [self._decode_arc(arc) for arc in arcs]

    def _decode_arc(self, arc: list) -> list[Position]:
        if self._scale is None:
            return [[float(p[0]), float(p[1]), *p[2:]] for p in arc]
        sx, sy = self._scale
        tx, ty = self._translate
        x = y = 0
        points: list[Position] = []
        for p in arc:
            x += p[0]
            y += p[1]
            points.append([x * sx + tx, y * sy + ty, *p[2:]])
        return points

    def point(self, p: list) -> Position:
        if self._scale is None:
            return [float(p[0]), float(p[1]), *p[2:]]
        return [
            p[0] * self._scale[0] + self._translate[0],
            p[1] * self._scale[1] + self._translate[1],
            *p[2:],
        ]

    def _arc(self, index: int, points: list[Position]) -> None:
        # Consecutive arcs share an endpoint
        if points:
            points.pop()
        try:
            arc = self._arcs[~index if index < 0 else index]
        except IndexError as e:
            raise TopologyError(f"arc index {index} out of range") from e
        if index < 0:
            arc = arc[::-1]
        points.extend(list(p) for p in arc)

    def line(self, arcs: list[int]) -> list[Position]:
        points: list[Position] = []
        for index in arcs:
            self._arc(index, points)
        if len(points) < 2:
            points.append(list(points[0]))
        return points

    def ring(self, arcs: list[int]) -> list[Position]:
        points = self.line(arcs)
        # Degenerate rings still need four positions to be valid GeoJSON
        while len(points) < 4:
            points.append(list(points[0]))
        return points

    def geometry(self, o: dict) -> dict | None:
        kind = o.get("type")
        if kind is None:
            return None
        if kind == "GeometryCollection":
            return {
                "type": "GeometryCollection",
                "geometries": [g for g in (self.geometry(c) for c in o.get("geometries", [])) if g],
            }
        if kind == "Point":
            coordinates: Any = self.point(o["coordinates"])
        elif kind == "MultiPoint":
            coordinates = [self.point(p) for p in o["coordinates"]]
        elif kind == "LineString":
            coordinates = self.line(o["arcs"])
        elif kind == "MultiLineString":
            coordinates = [self.line(a) for a in o["arcs"]]
        elif kind == "Polygon":
            coordinates = [self.ring(a) for a in o["arcs"]]
        elif kind == "MultiPolygon":
            coordinates = [[self.ring(a) for a in polygon] for polygon in o["arcs"]]
        else:
            raise TopologyError(f"unsupported geometry type {kind!r}")
        return {"type": kind, "coordinates": coordinates}

    def feature(self, o: dict) -> dict:
        feature: dict[str, Any] = {"type": "Feature"}
        if "id" in o:
            feature["id"] = o["id"]
        feature["properties"] = dict(o.get("properties") or {})
        feature["geometry"] = self.geometry(o)
        return feature


def feature(topology: dict, object_name: str) -> dict:
    """Convert ``topology.objects[object_name]`` to GeoJSON.

    A GeometryCollection becomes a FeatureCollection, anything else a single
    Feature, matching topojson-client's ``feature()``.
    """
    if not isinstance(topology, dict) or topology.get("type") != "Topology":
        raise TopologyError("document is not a TopoJSON Topology")
    objects = topology.get("objects") or {}
    o = objects.get(object_name)
    if not isinstance(o, dict):
        raise TopologyError(f"topology has no object named {object_name!r}")

    try:
        decoder = _Decoder(topology)
        if o.get("type") == "GeometryCollection":
            return {
                "type": "FeatureCollection",
                "features": [decoder.feature(g) for g in o.get("geometries", [])],
            }
        return decoder.feature(o)
    except TopologyError:
        raise
    except (KeyError, TypeError, IndexError, ValueError, AttributeError) as e:
        raise TopologyError(f"malformed topology object {object_name!r}: {e}") from e
