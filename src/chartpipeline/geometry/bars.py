from __future__ import annotations

from collections.abc import Sequence

from chartpipeline.domain.series import CategoricalValuePoint
from chartpipeline.domain.shapes import BarRect
from chartpipeline.scales.band import BandScale
from chartpipeline.scales.linear import LinearScale


def bar_key(index: int) -> str:
    return f"bar:{index}"


def bar_shapes(
    series: Sequence[CategoricalValuePoint],
    x: BandScale,
    y: LinearScale,
    inner_height: float,
) -> tuple[BarRect, ...]:
    """One rectangle per point, keyed by position in the series.

    Points sharing a category share a band and overlap. Non-finite values
    draw as zero-height bars on the baseline.
    """
    rects: list[BarRect] = []
    for index, point in enumerate(series):
        left = x(point.category)
        if left is None:
            continue
        top = y(point.value) if point.is_finite else inner_height
        rects.append(
            BarRect(
                key=bar_key(index),
                category=point.category,
                value=point.value,
                x=left,
                y=top,
                width=x.bandwidth,
                height=inner_height - top,
            )
        )
    return tuple(rects)
