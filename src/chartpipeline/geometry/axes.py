from __future__ import annotations

from chartpipeline.domain.shapes import Axis, AxisTick
from chartpipeline.geometry.path import fmt
from chartpipeline.scales.band import BandScale
from chartpipeline.scales.linear import LinearScale
from chartpipeline.scales.temporal import TemporalScale, format_instant


def linear_axis(scale: LinearScale, *, orient: str = "left", count: int = 10, transform: str = "") -> Axis:
    if scale.degenerate:
        values = [scale.domain[0]]
    else:
        values = scale.ticks(count)
    label = scale.tick_format(count)
    return Axis(
        orient=orient,
        ticks=tuple(AxisTick(value=v, position=scale(v), label=label(v)) for v in values),
        transform=transform,
    )


def temporal_axis(scale: TemporalScale, *, orient: str = "bottom", count: int = 10, transform: str = "") -> Axis:
    return Axis(
        orient=orient,
        ticks=tuple(
            AxisTick(value=v, position=scale(v), label=format_instant(v))
            for v in scale.ticks(count)
        ),
        transform=transform,
    )


def band_axis(scale: BandScale, *, orient: str = "bottom", transform: str = "") -> Axis:
    return Axis(
        orient=orient,
        ticks=tuple(
            AxisTick(value=c, position=scale.center(c), label=c) for c in scale.domain
        ),
        transform=transform,
    )


def translate(x: float, y: float) -> str:
    return f"translate({fmt(x)},{fmt(y)})"
