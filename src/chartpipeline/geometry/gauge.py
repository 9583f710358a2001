"""Semicircular gauge: static arc, tick marks, and a pointer.

Arc paths use the clockwise-from-12-o'clock angle convention. Tick marks
are placed with plain ``cos``/``sin`` of the scaled angle, and every tick
value is shifted by ``TICK_ANGLE_BIAS`` before scaling while the pointer
is not. Both behaviours are kept as-is.
"""
from __future__ import annotations

import math
from collections.abc import Sequence

from chartpipeline.domain.series import RatioScalar
from chartpipeline.domain.shapes import ArcShape, GaugeShape, GaugeTick, PointerShape
from chartpipeline.geometry.path import PathBuilder, fmt
from chartpipeline.scales.angular import AngularScale

TICK_ANGLE_BIAS = 150
CANONICAL_TICKS: tuple[float, ...] = (0, 25, 50, 75, 100)
POINTER_KEY = "gauge:pointer"
HUB_RADIUS = 6.0


def arc_path(
    inner_radius: float, outer_radius: float, start_angle: float, end_angle: float
) -> str:
    a0 = start_angle - math.pi / 2
    a1 = end_angle - math.pi / 2
    da = abs(a1 - a0)
    clockwise = a1 > a0
    large = da >= math.pi
    builder = PathBuilder()
    builder.move_to(outer_radius * math.cos(a0), outer_radius * math.sin(a0))
    builder.arc_to(
        outer_radius, large, clockwise, outer_radius * math.cos(a1), outer_radius * math.sin(a1)
    )
    if inner_radius > 0:
        builder.line_to(inner_radius * math.cos(a1), inner_radius * math.sin(a1))
        builder.arc_to(
            inner_radius, large, not clockwise, inner_radius * math.cos(a0), inner_radius * math.sin(a0)
        )
    else:
        builder.line_to(0, 0)
    return str(builder.close())


def background_arc(scale: AngularScale, radius: float, thickness: float) -> ArcShape:
    inner = radius - thickness
    return ArcShape(
        inner_radius=inner,
        outer_radius=radius,
        start_angle=scale.start_angle,
        end_angle=scale.end_angle,
        path=arc_path(inner, radius, scale.start_angle, scale.end_angle),
    )


def gauge_ticks(
    scale: AngularScale,
    radius: float,
    thickness: float,
    values: Sequence[float] = CANONICAL_TICKS,
    bias: float = TICK_ANGLE_BIAS,
) -> tuple[GaugeTick, ...]:
    inner = radius - thickness - 10
    label_radius = radius - thickness - 25
    out = []
    for value in values:
        angle = scale(value + bias)
        cos, sin = math.cos(angle), math.sin(angle)
        out.append(
            GaugeTick(
                value=value,
                angle=angle,
                x1=inner * cos,
                y1=inner * sin,
                x2=radius * cos,
                y2=radius * sin,
                label_x=label_radius * cos,
                label_y=label_radius * sin,
                label=fmt(value),
            )
        )
    return tuple(out)


def gauge_shape(
    ratio: RatioScalar,
    scale: AngularScale,
    *,
    size: float,
    thickness: float,
    tick_values: Sequence[float] = CANONICAL_TICKS,
    tick_bias: float = TICK_ANGLE_BIAS,
) -> GaugeShape:
    """Gauge for ``ratio``; an undefined ratio renders without pointer or label."""
    radius = size / 2
    pointer = None
    label = None
    if ratio.defined:
        pointer = PointerShape(
            key=POINTER_KEY,
            angle=scale(ratio.percentage),
            length=radius - thickness / 2,
        )
        label = f"{ratio.percentage:.0f}%"
    return GaugeShape(
        center=(radius, radius),
        arc=background_arc(scale, radius, thickness),
        ticks=gauge_ticks(scale, radius, thickness, tick_values, tick_bias),
        pointer=pointer,
        label=label,
        label_position=(radius, radius + thickness + 30),
        hub_radius=HUB_RADIUS,
    )
