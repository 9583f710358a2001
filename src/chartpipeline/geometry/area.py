from __future__ import annotations

from collections.abc import Sequence

from chartpipeline.domain.series import TemporalCountPoint
from chartpipeline.domain.shapes import AreaShape
from chartpipeline.geometry.curves import monotone_x
from chartpipeline.geometry.path import PathBuilder
from chartpipeline.scales.linear import LinearScale
from chartpipeline.scales.temporal import TemporalScale

AREA_KEY = "area:path"


def sort_by_instant(series: Sequence[TemporalCountPoint]) -> list[TemporalCountPoint]:
    # sorted() is stable: equal instants keep their extraction order.
    return sorted(series, key=lambda point: point.instant)


def area_shape(
    series: Sequence[TemporalCountPoint],
    x: TemporalScale,
    y: LinearScale,
    baseline: float,
) -> AreaShape:
    """Closed area from ``baseline`` up to each count, left to right in time."""
    ordered = sort_by_instant(series)
    points = tuple((x(p.instant), y(p.count)) for p in ordered)
    builder = PathBuilder()
    if len(points) == 1:
        (px, py), = points
        builder.move_to(px, py).line_to(px, baseline).close()
    elif points:
        monotone_x(points, builder)
        builder.line_to(points[-1][0], baseline)
        builder.line_to(points[0][0], baseline)
        builder.close()
    return AreaShape(key=AREA_KEY, path=str(builder), points=points, baseline=baseline)
