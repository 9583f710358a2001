from __future__ import annotations

import pytest


@pytest.fixture
def square_topology() -> dict:
    """Quantized topology with one square country and one border line."""
    return {
        "type": "Topology",
        "transform": {"scale": [1.0, 1.0], "translate": [-10.0, -10.0]},
        "objects": {
            "countries": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "arcs": [[0]], "id": "SQ", "properties": {"name": "Square"}},
                    {"type": "LineString", "arcs": [1], "id": "BORDER"},
                ],
            }
        },
        "arcs": [
            [[0, 0], [20, 0], [0, 20], [-20, 0], [0, -20]],
            [[10, 0], [0, 20]],
        ],
    }
