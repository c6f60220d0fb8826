import pytest

from services import topology
from services.topology import TopologyError


def _topo(geometries, arcs, transform=None):
    doc = {
        "type": "Topology",
        "arcs": arcs,
        "objects": {"shapes": {"type": "GeometryCollection", "geometries": geometries}},
    }
    if transform:
        doc["transform"] = transform
    return doc


SQUARE_ARCS = [
    [[0, 0], [1, 0], [1, 1]],
    [[1, 1], [0, 1], [0, 0]],
]


def test_stitches_arcs_into_ring() -> None:
    doc = _topo([{"type": "Polygon", "arcs": [[0, 1]], "properties": {"name": "A"}}], SQUARE_ARCS)
    collection = topology.feature(doc, "shapes")

    assert collection["type"] == "FeatureCollection"
    (feature,) = collection["features"]
    assert feature["properties"] == {"name": "A"}
    assert feature["geometry"]["coordinates"] == [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]


def test_negative_indexes_reverse_arcs() -> None:
    doc = _topo([{"type": "Polygon", "arcs": [[~1, ~0]]}], SQUARE_ARCS)
    ring = topology.feature(doc, "shapes")["features"][0]["geometry"]["coordinates"][0]
    assert ring == [[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]


def test_quantized_arcs_are_delta_decoded() -> None:
    doc = _topo(
        [
            {"type": "LineString", "arcs": [0], "id": "x"},
            {"type": "Point", "coordinates": [4, 3]},
        ],
        [[[0, 0], [2, 0], [0, 1]]],
        transform={"scale": [0.5, 2], "translate": [10, 20]},
    )
    line, point = topology.feature(doc, "shapes")["features"]
    assert line["id"] == "x"
    assert line["geometry"] == {"type": "LineString", "coordinates": [[10, 20], [11, 20], [11, 22]]}
    # Points are quantized but never delta-encoded
    assert point["geometry"] == {"type": "Point", "coordinates": [12, 26]}


def test_multipolygon_and_null_geometry() -> None:
    doc = _topo(
        [
            {"type": "MultiPolygon", "arcs": [[[0, 1]], [[~1, ~0]]], "properties": {"name": "M"}},
            {"type": None, "properties": {"name": "Nowhere"}},
        ],
        SQUARE_ARCS,
    )
    multi, empty = topology.feature(doc, "shapes")["features"]
    assert multi["geometry"]["type"] == "MultiPolygon"
    assert len(multi["geometry"]["coordinates"]) == 2
    assert empty["geometry"] is None
    assert empty["properties"] == {"name": "Nowhere"}


def test_single_object_becomes_feature() -> None:
    doc = {"type": "Topology", "arcs": SQUARE_ARCS, "objects": {"one": {"type": "Polygon", "arcs": [[0, 1]]}}}
    result = topology.feature(doc, "one")
    assert result["type"] == "Feature"
    assert result["properties"] == {}


def test_degenerate_ring_is_padded() -> None:
    doc = _topo([{"type": "Polygon", "arcs": [[0]]}], [[[0, 0], [1, 1]]])
    ring = topology.feature(doc, "shapes")["features"][0]["geometry"]["coordinates"][0]
    assert len(ring) == 4


@pytest.mark.parametrize(
    "doc",
    [
        {"type": "FeatureCollection"},
        {"type": "Topology", "arcs": [], "objects": {}},
        {"type": "Topology", "objects": {"shapes": {"type": "Polygon", "arcs": [[0]]}}},
        _topo([{"type": "Polygon", "arcs": [[5]]}], SQUARE_ARCS),
        _topo([{"type": "Hexagon", "arcs": [[0]]}], SQUARE_ARCS),
    ],
)
def test_malformed_topology(doc) -> None:
    with pytest.raises(TopologyError):
        topology.feature(doc, "shapes")


@pytest.mark.parametrize(
    "arcs, transform",
    [
        ([[["a", 1]]], {"scale": [1, 1], "translate": [0, 0]}),
        ([[["a", 1]]], None),
        ([[None]], None),
    ],
)
def test_non_numeric_arcs_are_malformed(arcs, transform) -> None:
    doc = _topo([{"type": "Polygon", "arcs": [[0]]}], arcs, transform=transform)
    with pytest.raises(TopologyError):
        topology.feature(doc, "shapes")
