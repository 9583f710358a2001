from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from chartpipeline.animation.scene import Scene
from chartpipeline.config.charts import (
    AreaChartConfig,
    BarChartConfig,
    ChartConfig,
    GaugeChartConfig,
    MapChartConfig,
    default_config,
)
from chartpipeline.domain.record import ensure_records
from chartpipeline.domain.shapes import ChartShapes
from chartpipeline.domain.viewport import Viewport
from chartpipeline.geometry.area import area_shape
from chartpipeline.geometry.axes import band_axis, linear_axis, temporal_axis, translate
from chartpipeline.geometry.bars import bar_shapes
from chartpipeline.geometry.gauge import POINTER_KEY, gauge_shape
from chartpipeline.geometry.map import map_shape
from chartpipeline.geometry.path import fmt
from chartpipeline.geometry.topology import Topology
from chartpipeline.pipeline.observability import Diagnostics, Observer
from chartpipeline.pipeline.viewport import ViewportManager
from chartpipeline.scales.projection import MercatorProjection
from chartpipeline.scales.resolve import resolve_scale
from chartpipeline.transforms import (
    CategoricalValueExtractor,
    GeoPointExtractor,
    SameDayRatioExtractor,
    TemporalCountExtractor,
)
from chartpipeline.transforms.interfaces import ExtractorBase

logger = logging.getLogger(__name__)

Props = Mapping[str, Mapping[str, float]]


@dataclass(frozen=True)
class RenderResult:
    """Output of one pipeline run, recomputed wholesale on every trigger."""

    shapes: ChartShapes
    viewport: Viewport
    series: Any
    scales: Mapping[str, Any]
    diagnostics: Diagnostics = field(compare=False)


@dataclass(frozen=True)
class _Build:
    shapes: ChartShapes
    scales: Mapping[str, Any]
    targets: Props = field(default_factory=dict)
    enter: Props = field(default_factory=dict)


class ChartPipeline(ABC):
    """Recomputes scales and geometry on data changes and container resizes.

    Both triggers rebuild everything from the latest records and viewport;
    animated properties are retargeted on the scene, which cancels any
    in-flight target in favour of the new one.
    """

    kind: str = ""

    def __init__(
        self,
        config: Optional[ChartConfig] = None,
        *,
        records: Any = (),
        width: Optional[float] = None,
        height: Optional[float] = None,
        observer: Optional[Observer] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config if config is not None else default_config(self.kind)
        if self.config.kind != self.kind:
            raise ValueError(f"{type(self).__name__} needs a {self.kind!r} config, got {self.config.kind!r}")
        self.extractor = self.make_extractor(self.config)
        self.observer = observer
        self.clock = clock
        self.scene = Scene(
            duration=self.config.transition.duration,
            easing=self.config.transition.easing,
        )
        self.renders = 0
        self.result: Optional[RenderResult] = None
        self._records = list(ensure_records(records))
        self._now: Optional[float] = None
        self.viewports = ViewportManager(
            self.viewport_policy, width=width, height=height, listener=self._on_viewport
        )

    @property
    def viewport(self) -> Viewport:
        return self.viewports.current

    @abstractmethod
    def viewport_policy(self, width: Optional[float], height: Optional[float]) -> Viewport:
        ...

    @abstractmethod
    def make_extractor(self, config: Any) -> ExtractorBase:
        ...

    def extract(self, records: list[Any], diagnostics: Diagnostics) -> Any:
        return self.extractor(records, diagnostics)

    @abstractmethod
    def build(self, series: Any, viewport: Viewport, diagnostics: Diagnostics) -> _Build:
        ...

    def set_data(self, records: Any, now: Optional[float] = None) -> RenderResult:
        rows = list(ensure_records(records))
        previous = self._records
        self._records = rows
        try:
            return self._run(self._stamp(now), self.viewport)
        except Exception:
            self._records = previous
            raise

    def resize(
        self, width: Optional[float], height: Optional[float] = None, now: Optional[float] = None
    ) -> Optional[RenderResult]:
        """Returns the new result, or ``None`` when the viewport did not change."""
        self._now = self._stamp(now)
        try:
            changed = self.viewports.observe(width, height)
        finally:
            self._now = None
        return self.result if changed is not None else None

    def frame(self, now: Optional[float] = None) -> dict[str, dict[str, float]]:
        return self.scene.frame(self._stamp(now))

    def _stamp(self, now: Optional[float]) -> float:
        return self.clock() if now is None else now

    def _on_viewport(self, viewport: Viewport) -> None:
        self._run(self._now if self._now is not None else self.clock(), viewport)

    def _run(self, now: float, viewport: Viewport) -> RenderResult:
        diagnostics = Diagnostics(self.observer)
        series = self.extract(self._records, diagnostics)
        built = self.build(series, viewport, diagnostics)
        self.scene.update(built.targets, now, enter=built.enter)
        self.renders += 1
        self.result = RenderResult(
            shapes=built.shapes,
            viewport=viewport,
            series=series,
            scales=built.scales,
            diagnostics=diagnostics,
        )
        logger.debug(
            "%s render #%d at %sx%s: %d conditions",
            self.kind, self.renders, fmt(viewport.width), fmt(viewport.height), len(diagnostics),
        )
        return self.result


class AreaChartPipeline(ChartPipeline):
    kind = "area"
    config: AreaChartConfig

    def make_extractor(self, config: AreaChartConfig) -> TemporalCountExtractor:
        return TemporalCountExtractor(date=config.date_field)

    def viewport_policy(self, width: Optional[float], height: Optional[float]) -> Viewport:
        w = width or self.config.default_width
        return Viewport(
            width=w, height=w * self.config.aspect_ratio, margins=self.config.margins.to_margins()
        )

    def build(self, series: Any, viewport: Viewport, diagnostics: Diagnostics) -> _Build:
        inner_w, inner_h = viewport.inner_width, viewport.inner_height
        x = resolve_scale(series, lambda p: p.instant, (0, inner_w), "temporal", diagnostics=diagnostics)
        y = resolve_scale(series, lambda p: p.count, (inner_h, 0), "linear", diagnostics=diagnostics)
        shapes = ChartShapes(
            kind=self.kind,
            view_box=viewport.view_box,
            transform=translate(viewport.margins.left, viewport.margins.top),
            area=area_shape(series, x, y, baseline=inner_h),
            axes=(
                temporal_axis(x, transform=translate(0, inner_h)),
                linear_axis(y),
            ),
        )
        return _Build(shapes=shapes, scales={"x": x, "y": y})


class BarChartPipeline(ChartPipeline):
    kind = "bar"
    config: BarChartConfig

    def make_extractor(self, config: BarChartConfig) -> CategoricalValueExtractor:
        return CategoricalValueExtractor(label=config.label_field, value=config.value_field)

    def viewport_policy(self, width: Optional[float], height: Optional[float]) -> Viewport:
        return Viewport(
            width=width or self.config.width,
            height=self.config.height,
            margins=self.config.margins.to_margins(),
        )

    def build(self, series: Any, viewport: Viewport, diagnostics: Diagnostics) -> _Build:
        margins = viewport.margins
        # Long series widen the plot instead of squeezing bars below min_step.
        inner_w = max(len(series) * self.config.min_step, viewport.inner_width)
        inner_h = viewport.inner_height
        x = resolve_scale(
            series, lambda p: p.category, (0, inner_w), "band",
            padding=self.config.padding, diagnostics=diagnostics,
        )
        y = resolve_scale(series, lambda p: p.value, (inner_h, 0), "linear", diagnostics=diagnostics)
        rects = bar_shapes(series, x, y, inner_h)
        total_w = inner_w + margins.left + margins.right
        shapes = ChartShapes(
            kind=self.kind,
            view_box=f"0 0 {fmt(total_w)} {fmt(viewport.height)}",
            transform=translate(margins.left, margins.top),
            bars=rects,
            axes=(band_axis(x, transform=translate(0, inner_h)), linear_axis(y)),
        )
        return _Build(
            shapes=shapes,
            scales={"x": x, "y": y},
            targets={
                r.key: {"x": r.x, "y": r.y, "width": r.width, "height": r.height} for r in rects
            },
            enter={r.key: {"y": inner_h, "height": 0.0} for r in rects},
        )


class GaugeChartPipeline(ChartPipeline):
    kind = "gauge"
    config: GaugeChartConfig

    def make_extractor(self, config: GaugeChartConfig) -> SameDayRatioExtractor:
        return SameDayRatioExtractor(left=config.buyer_field, right=config.supplier_field)

    def viewport_policy(self, width: Optional[float], height: Optional[float]) -> Viewport:
        size = self.config.size
        return Viewport(width=size, height=size / 2 + 50)

    def build(self, series: Any, viewport: Viewport, diagnostics: Diagnostics) -> _Build:
        cfg = self.config
        scale = resolve_scale(
            (), None, (cfg.start_angle, cfg.end_angle), "angular",
            domain=(cfg.min_value, cfg.max_value),
        )
        gauge = gauge_shape(
            series, scale,
            size=cfg.size, thickness=cfg.arc_thickness,
            tick_values=cfg.tick_values, tick_bias=cfg.tick_bias,
        )
        targets: dict[str, dict[str, float]] = {}
        if gauge.pointer is not None:
            targets[POINTER_KEY] = {"angle": gauge.pointer.angle}
        shapes = ChartShapes(kind=self.kind, view_box=viewport.view_box, gauge=gauge)
        return _Build(
            shapes=shapes,
            scales={"angle": scale},
            targets=targets,
            enter={POINTER_KEY: {"angle": cfg.start_angle}},
        )


class MapChartPipeline(ChartPipeline):
    kind = "map"
    config: MapChartConfig

    def __init__(
        self,
        config: Optional[MapChartConfig] = None,
        *,
        topology: "Topology | Mapping[str, Any] | None" = None,
        **kwargs: Any,
    ) -> None:
        if topology is not None and not isinstance(topology, Topology):
            topology = Topology(topology)
        self.topology = topology
        super().__init__(config, **kwargs)

    def make_extractor(self, config: MapChartConfig) -> GeoPointExtractor:
        return GeoPointExtractor(latitude=config.latitude_field, longitude=config.longitude_field)

    def viewport_policy(self, width: Optional[float], height: Optional[float]) -> Viewport:
        return Viewport(
            width=width or self.config.default_width,
            height=height or self.config.default_height,
        )

    def build(self, series: Any, viewport: Viewport, diagnostics: Diagnostics) -> _Build:
        projection = MercatorProjection.for_viewport(viewport)
        shape = map_shape(
            series, projection,
            topology=self.topology,
            regions=self.config.regions,
            radius=self.config.marker_radius,
            diagnostics=diagnostics,
        )
        shapes = ChartShapes(kind=self.kind, view_box=viewport.view_box, map=shape)
        return _Build(shapes=shapes, scales={"projection": projection})


PIPELINES: dict[str, type[ChartPipeline]] = {
    "area": AreaChartPipeline,
    "bar": BarChartPipeline,
    "gauge": GaugeChartPipeline,
    "map": MapChartPipeline,
}


def build_pipeline(config: ChartConfig, **kwargs: Any) -> ChartPipeline:
    return PIPELINES[config.kind](config, **kwargs)
