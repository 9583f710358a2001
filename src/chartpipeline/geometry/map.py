from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

from chartpipeline.domain.series import GeoPoint
from chartpipeline.domain.shapes import MapShape, PointMarker
from chartpipeline.errors import ProjectionFailure
from chartpipeline.geometry.path import PathBuilder
from chartpipeline.geometry.topology import Topology
from chartpipeline.pipeline.observability import Diagnostics
from chartpipeline.scales.projection import MercatorProjection

logger = logging.getLogger(__name__)

MARKER_RADIUS = 4.0


def marker_key(index: int) -> str:
    return f"marker:{index}"


def _append_line(
    builder: PathBuilder,
    coordinates: Iterable[Sequence[float]],
    projection: MercatorProjection,
    closed: bool,
) -> None:
    projected = [projection.project_clamped((c[0], c[1])) for c in coordinates]
    projected = [p for p in projected if p is not None]
    if not projected:
        return
    builder.move_to(*projected[0])
    for x, y in projected[1:]:
        builder.line_to(x, y)
    if closed:
        builder.close()


def _append_geometry(
    builder: PathBuilder, geometry: Optional[Mapping[str, Any]], projection: MercatorProjection
) -> None:
    if not geometry:
        return
    kind = geometry["type"]
    if kind == "GeometryCollection":
        for child in geometry["geometries"]:
            _append_geometry(builder, child, projection)
    elif kind == "LineString":
        _append_line(builder, geometry["coordinates"], projection, closed=False)
    elif kind == "MultiLineString":
        for line in geometry["coordinates"]:
            _append_line(builder, line, projection, closed=False)
    elif kind == "Polygon":
        for ring in geometry["coordinates"]:
            _append_line(builder, ring, projection, closed=True)
    elif kind == "MultiPolygon":
        for polygon in geometry["coordinates"]:
            for ring in polygon:
                _append_line(builder, ring, projection, closed=True)
    # Point geometries have no outline.


def boundary_path(feature: Mapping[str, Any], projection: MercatorProjection) -> str:
    builder = PathBuilder()
    if feature.get("type") == "FeatureCollection":
        for child in feature.get("features", []):
            _append_geometry(builder, child.get("geometry"), projection)
    else:
        _append_geometry(builder, feature.get("geometry"), projection)
    return str(builder)


def point_markers(
    points: Sequence[GeoPoint],
    projection: MercatorProjection,
    *,
    radius: float = MARKER_RADIUS,
    diagnostics: Optional[Diagnostics] = None,
) -> tuple[tuple[PointMarker, ...], int]:
    """Project each point; unprojectable points are dropped and counted."""
    markers: list[PointMarker] = []
    dropped = 0
    for index, point in enumerate(points):
        projected = projection((point.longitude, point.latitude))
        if projected is None:
            dropped += 1
            if diagnostics is not None:
                diagnostics.signal(
                    ProjectionFailure(
                        f"cannot project lat={point.latitude} lon={point.longitude}",
                        index=index,
                    )
                )
            continue
        x, y = projected
        markers.append(PointMarker(key=marker_key(index), x=x, y=y, radius=radius))
    return tuple(markers), dropped


def map_shape(
    points: Sequence[GeoPoint],
    projection: MercatorProjection,
    *,
    topology: Optional[Topology] = None,
    regions: str = "countries",
    radius: float = MARKER_RADIUS,
    diagnostics: Optional[Diagnostics] = None,
) -> MapShape:
    outline = ""
    if topology is not None:
        outline = boundary_path(topology.feature(regions), projection)
    markers, dropped = point_markers(
        points, projection, radius=radius, diagnostics=diagnostics
    )
    if dropped:
        logger.debug("dropped %d unprojectable points", dropped)
    return MapShape(boundary_path=outline, markers=markers, dropped=dropped)
