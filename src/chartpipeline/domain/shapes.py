"""Renderable geometry, independent of any drawing surface.

Coordinates are in the inner drawing area of the viewport (margins already
subtracted) unless a descriptor carries its own ``transform``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Literal, Optional


@dataclass(frozen=True)
class AxisTick:
    value: Any
    position: float
    label: str


@dataclass(frozen=True)
class Axis:
    orient: Literal["bottom", "left"]
    ticks: tuple[AxisTick, ...]
    transform: str = ""


@dataclass(frozen=True)
class AreaShape:
    key: str
    path: str
    points: tuple[tuple[float, float], ...]
    baseline: float


@dataclass(frozen=True)
class BarRect:
    key: str
    category: str
    value: float
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ArcShape:
    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float
    path: str


@dataclass(frozen=True)
class GaugeTick:
    value: float
    angle: float
    x1: float
    y1: float
    x2: float
    y2: float
    label_x: float
    label_y: float
    label: str


@dataclass(frozen=True)
class PointerShape:
    key: str
    angle: float
    length: float

    @property
    def rotation(self) -> float:
        """Rotation in degrees for a pointer drawn straight up from the centre."""
        return math.degrees(self.angle)

    @property
    def tip(self) -> tuple[float, float]:
        return (self.length * math.sin(self.angle), -self.length * math.cos(self.angle))


@dataclass(frozen=True)
class GaugeShape:
    center: tuple[float, float]
    arc: ArcShape
    ticks: tuple[GaugeTick, ...]
    pointer: Optional[PointerShape]
    label: Optional[str]
    label_position: tuple[float, float] = (0.0, 0.0)
    hub_radius: float = 6.0


@dataclass(frozen=True)
class PointMarker:
    key: str
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class MapShape:
    boundary_path: str
    markers: tuple[PointMarker, ...]
    dropped: int = 0


@dataclass(frozen=True)
class ChartShapes:
    """Everything one pipeline run hands to the rendering surface."""

    kind: str
    view_box: str
    transform: str = ""
    area: Optional[AreaShape] = None
    bars: tuple[BarRect, ...] = ()
    gauge: Optional[GaugeShape] = None
    map: Optional[MapShape] = None
    axes: tuple[Axis, ...] = field(default_factory=tuple)
