"""Monotone cubic interpolation in x (Steffen's method).

The curve passes through every point, never overshoots between two
neighbours, and stays monotone wherever the data is monotone.
"""
from __future__ import annotations

from collections.abc import Sequence

from chartpipeline.geometry.path import PathBuilder


def _sign(value: float) -> int:
    return -1 if value < 0 else 1


def _secant(x0: float, y0: float, x1: float, y1: float) -> float:
    h = x1 - x0
    return (y1 - y0) / h if h else 0.0


def _interior_slope(
    x0: float, y0: float, x1: float, y1: float, x2: float, y2: float
) -> float:
    h0 = x1 - x0
    h1 = x2 - x1
    s0 = _secant(x0, y0, x1, y1)
    s1 = _secant(x1, y1, x2, y2)
    if not h0 + h1:
        return 0.0
    p = (s0 * h1 + s1 * h0) / (h0 + h1)
    return (_sign(s0) + _sign(s1)) * min(abs(s0), abs(s1), 0.5 * abs(p))


def _end_slope(x0: float, y0: float, x1: float, y1: float, t: float) -> float:
    h = x1 - x0
    return (3 * (y1 - y0) / h - t) / 2 if h else t


def monotone_x_tangents(points: Sequence[tuple[float, float]]) -> list[float]:
    n = len(points)
    if n < 3:
        return [0.0] * n
    tangents = [0.0] * n
    for i in range(1, n - 1):
        (x0, y0), (x1, y1), (x2, y2) = points[i - 1], points[i], points[i + 1]
        tangents[i] = _interior_slope(x0, y0, x1, y1, x2, y2)
    tangents[0] = _end_slope(*points[0], *points[1], tangents[1])
    tangents[-1] = _end_slope(*points[-2], *points[-1], tangents[-2])
    return tangents


def monotone_x(points: Sequence[tuple[float, float]], builder: PathBuilder | None = None) -> PathBuilder:
    """Append a monotone-x curve through ``points`` to ``builder``.

    The first point is a ``move_to`` when starting a fresh builder and a
    ``line_to`` otherwise. Two points are joined by a straight line.
    """
    builder = builder if builder is not None else PathBuilder()
    fresh = not str(builder)
    if not points:
        return builder
    x, y = points[0]
    if fresh:
        builder.move_to(x, y)
    else:
        builder.line_to(x, y)
    if len(points) == 2:
        builder.line_to(*points[1])
        return builder
    tangents = monotone_x_tangents(points)
    for i in range(1, len(points)):
        (x0, y0), (x1, y1) = points[i - 1], points[i]
        dx = (x1 - x0) / 3
        builder.curve_to(
            x0 + dx, y0 + dx * tangents[i - 1], x1 - dx, y1 - dx * tangents[i], x1, y1
        )
    return builder
