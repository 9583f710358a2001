"""Minimal TopoJSON decoding into GeoJSON-like mappings.

Supports quantized topologies (``transform`` with delta-encoded arcs) and
plain ones, negative (reversed) arc indices, and the Point, MultiPoint,
LineString, MultiLineString, Polygon, MultiPolygon and GeometryCollection
geometry types.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from chartpipeline.errors import InvalidInputError

Position = tuple[float, float]


class Topology:
    def __init__(self, document: Mapping[str, Any]) -> None:
        if not isinstance(document, Mapping) or document.get("type") != "Topology":
            raise InvalidInputError("topology must be a mapping with type 'Topology'")
        objects = document.get("objects")
        if not isinstance(objects, Mapping):
            raise InvalidInputError("topology is missing its 'objects' collection")
        self.objects: Mapping[str, Any] = objects
        transform = document.get("transform")
        if transform is not None:
            sx, sy = transform["scale"]
            tx, ty = transform["translate"]
            self._transform: tuple[float, float, float, float] | None = (sx, sy, tx, ty)
        else:
            self._transform = None
        self.arcs = [self._decode_arc(arc) for arc in document.get("arcs", [])]

    def _decode_arc(self, arc: Sequence[Sequence[float]]) -> list[Position]:
        if self._transform is None:
            return [(float(p[0]), float(p[1])) for p in arc]
        sx, sy, tx, ty = self._transform
        x = y = 0
        out = []
        for p in arc:
            x += p[0]
            y += p[1]
            out.append((x * sx + tx, y * sy + ty))
        return out

    def position(self, p: Sequence[float]) -> Position:
        if self._transform is None:
            return (float(p[0]), float(p[1]))
        sx, sy, tx, ty = self._transform
        return (p[0] * sx + tx, p[1] * sy + ty)

    def _arc(self, index: int) -> list[Position]:
        try:
            return self.arcs[index] if index >= 0 else self.arcs[~index][::-1]
        except IndexError:
            raise InvalidInputError(f"arc index {index} out of range") from None

    def line(self, indexes: Sequence[int]) -> list[Position]:
        points: list[Position] = []
        for index in indexes:
            arc = self._arc(index)
            # Consecutive arcs share their joining point.
            points.extend(arc[1:] if points else arc)
        return points

    def geometry(self, obj: Mapping[str, Any]) -> dict[str, Any] | None:
        kind = obj.get("type")
        arcs = obj.get("arcs")
        if kind == "GeometryCollection":
            return {
                "type": "GeometryCollection",
                "geometries": [self.geometry(g) for g in obj.get("geometries", [])],
            }
        if kind == "Point":
            coordinates: Any = self.position(obj["coordinates"])
        elif kind == "MultiPoint":
            coordinates = [self.position(p) for p in obj["coordinates"]]
        elif kind == "LineString":
            coordinates = self.line(arcs)
        elif kind == "MultiLineString" or kind == "Polygon":
            coordinates = [self.line(a) for a in arcs]
        elif kind == "MultiPolygon":
            coordinates = [[self.line(ring) for ring in polygon] for polygon in arcs]
        elif kind is None:
            return None
        else:
            raise InvalidInputError(f"unsupported topology geometry type: {kind!r}")
        return {"type": kind, "coordinates": coordinates}

    def feature(self, name: str) -> dict[str, Any]:
        """GeoJSON Feature(Collection) for the named object, e.g. ``countries``."""
        try:
            obj = self.objects[name]
        except KeyError:
            raise InvalidInputError(f"topology has no object named {name!r}") from None
        if obj.get("type") == "GeometryCollection":
            return {
                "type": "FeatureCollection",
                "features": [self._feature(g) for g in obj.get("geometries", [])],
            }
        return self._feature(obj)

    def _feature(self, obj: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "type": "Feature",
            "id": obj.get("id"),
            "properties": dict(obj.get("properties") or {}),
            "geometry": self.geometry(obj),
        }
