from __future__ import annotations

import math

import pytest

from chartpipeline.config.charts import default_config, parse_chart_config
from chartpipeline.errors import (
    DegenerateDomainWarning,
    DivisionByZero,
    InvalidInputError,
    ProjectionFailure,
)
from chartpipeline.pipeline.charts import (
    AreaChartPipeline,
    BarChartPipeline,
    GaugeChartPipeline,
    MapChartPipeline,
    build_pipeline,
)
from tests.unit.helpers import ManualClock, costed_orders, dated_orders, make_order


class TestAreaChart:
    def test_counts_per_day_drawn_in_time_order(self):
        records = dated_orders("2024-01-02", "2024-01-01", "2024-01-02") + [make_order()]

        pipeline = AreaChartPipeline(records=records, clock=ManualClock())

        result = pipeline.result
        assert [(p.key, p.count) for p in result.series] == [("2024-01-02", 2), ("2024-01-01", 1)]
        assert pipeline.extractor.skipped == 1
        assert result.viewport.width == 800
        assert result.viewport.height == 400
        assert result.shapes.view_box == "0 0 800 400"
        assert result.shapes.transform == "translate(40,20)"
        assert result.shapes.area.points == ((0, 175), (730, 0))
        assert [a.orient for a in result.shapes.axes] == ["bottom", "left"]

    def test_height_follows_width(self):
        pipeline = AreaChartPipeline(records=dated_orders("2024-01-01"), width=600, clock=ManualClock())
        assert pipeline.viewport.height == 300

    def test_resize_recomputes_only_when_size_changes(self):
        pipeline = AreaChartPipeline(records=dated_orders("2024-01-01", "2024-01-05"), clock=ManualClock())
        assert pipeline.renders == 1

        result = pipeline.resize(1000, now=1.0)

        assert result is pipeline.result
        assert result.viewport.height == 500
        assert result.scales["x"].range == (0, 1000 - 70)
        assert pipeline.renders == 2
        assert pipeline.resize(1000, now=2.0) is None
        assert pipeline.renders == 2

    def test_empty_data_reports_degenerate_domains(self):
        events = []
        pipeline = AreaChartPipeline(observer=events.append, clock=ManualClock())

        diagnostics = pipeline.result.diagnostics
        assert diagnostics.count(DegenerateDomainWarning) == 2
        assert len(events) == 2
        assert pipeline.result.shapes.area.path == ""

    def test_failed_update_keeps_previous_records(self):
        pipeline = AreaChartPipeline(records=dated_orders("2024-01-01"), clock=ManualClock())
        before = pipeline.result

        with pytest.raises(InvalidInputError):
            pipeline.set_data(dated_orders("yesterday"))

        assert pipeline.result is before
        after = pipeline.resize(1200)
        assert [p.key for p in after.series] == ["2024-01-01"]

    def test_rejects_config_for_another_chart(self):
        with pytest.raises(ValueError, match="area"):
            AreaChartPipeline(default_config("bar"))


class TestBarChart:
    @pytest.fixture
    def clock(self) -> ManualClock:
        return ManualClock()

    @pytest.fixture
    def pipeline(self, clock) -> BarChartPipeline:
        return BarChartPipeline(records=costed_orders(("A-1", 10), ("A-2", 40)), clock=clock)

    def test_bars_grow_from_the_baseline(self, pipeline, clock):
        start = pipeline.frame(0.0)
        assert start["bar:0"]["y"] == 340
        assert start["bar:0"]["height"] == 0
        assert start["bar:0"]["x"] == pytest.approx(17.75)
        assert start["bar:1"]["width"] == pytest.approx(319.5)

        end = pipeline.frame(0.25)
        assert end["bar:0"]["y"] == pytest.approx(255)
        assert end["bar:0"]["height"] == pytest.approx(85)
        assert end["bar:1"]["height"] == pytest.approx(340)
        assert not pipeline.scene.animating

    def test_resize_mid_animation_retargets_positions(self, pipeline, clock):
        clock.advance(0.1)

        result = pipeline.resize(400)

        assert result.viewport.width == 400
        x = pipeline.scene.transition("bar:1", "x")
        assert x.animation.from_value == pytest.approx(372.75)
        assert x.animation.to_value == pytest.approx(162.75)
        assert x.animation.started_at == 0.1
        # The vertical target is unchanged, so the grow animation keeps running.
        assert pipeline.scene.transition("bar:0", "y").animation.started_at == 0.0

    def test_long_series_widen_the_plot(self, clock):
        orders = costed_orders(*[(f"A-{i}", 1) for i in range(30)])

        pipeline = BarChartPipeline(records=orders, clock=clock)

        assert pipeline.result.shapes.view_box == "0 0 1290 400"
        assert pipeline.result.scales["x"].bandwidth == pytest.approx(36)

    def test_removed_bars_leave_the_scene(self, pipeline):
        pipeline.set_data(costed_orders(("A-1", 10)), now=1.0)
        assert pipeline.scene.keys() == ["bar:0"]


class TestGaugeChart:
    def records(self):
        same = make_order(buyer_date="2024-03-01", supplier_date="2024-03-01")
        late = make_order(buyer_date="2024-03-01", supplier_date="2024-03-04")
        return [same, same, same, late]

    def test_pointer_sweeps_from_start_angle(self):
        pipeline = GaugeChartPipeline(records=self.records(), clock=ManualClock())

        assert pipeline.result.series.percentage == pytest.approx(75)
        assert pipeline.result.shapes.gauge.label == "75%"
        assert pipeline.result.shapes.view_box == "0 0 220 160"
        assert pipeline.frame(0.0)["gauge:pointer"]["angle"] == pytest.approx(-math.pi / 2)
        assert pipeline.frame(0.25)["gauge:pointer"]["angle"] == pytest.approx(math.pi / 4)

    def test_new_data_restarts_from_current_angle(self):
        pipeline = GaugeChartPipeline(records=self.records(), clock=ManualClock())
        midway = pipeline.frame(0.1)["gauge:pointer"]["angle"]

        pipeline.set_data(self.records()[:3], now=0.1)

        animation = pipeline.scene.transition("gauge:pointer", "angle").animation
        assert animation.from_value == pytest.approx(midway)
        assert animation.to_value == pytest.approx(math.pi / 2)

    def test_no_records_hides_the_pointer(self):
        pipeline = GaugeChartPipeline(records=self.records(), clock=ManualClock())

        result = pipeline.set_data([], now=1.0)

        assert result.series.percentage is None
        assert result.shapes.gauge.pointer is None
        assert "gauge:pointer" not in pipeline.scene
        assert result.diagnostics.count(DivisionByZero) == 1

    def test_container_size_is_ignored(self):
        pipeline = GaugeChartPipeline(clock=ManualClock())
        assert pipeline.resize(1000, 1000) is None


class TestMapChart:
    def test_markers_and_outline(self, square_topology):
        records = [
            make_order(latitude=10, longitude=20),
            make_order(latitude=120, longitude=0),
            make_order(latitude=5),
        ]

        pipeline = MapChartPipeline(records=records, topology=square_topology, clock=ManualClock())

        shape = pipeline.result.shapes.map
        assert pipeline.result.shapes.view_box == "0 0 960 500"
        assert shape.boundary_path.startswith("M")
        assert [m.key for m in shape.markers] == ["marker:0"]
        assert shape.dropped == 1
        assert pipeline.extractor.skipped == 1
        assert pipeline.result.diagnostics.count(ProjectionFailure) == 1

    def test_projection_tracks_the_viewport(self):
        pipeline = MapChartPipeline(records=[make_order(latitude=0, longitude=0)], clock=ManualClock())

        result = pipeline.resize(480, 250)

        assert result.scales["projection"].scale == pytest.approx(480 / 6.5)
        (marker,) = result.shapes.map.markers
        assert marker.x == pytest.approx(240)
        assert marker.y == pytest.approx(250 / 1.5)


def test_first_render_happens_during_construction():
    pipeline = BarChartPipeline(records=costed_orders(("A-1", 10)), width=640, clock=ManualClock())

    assert pipeline.renders == 1
    assert pipeline.viewports.emitted == 1
    assert pipeline.result.viewport == pipeline.viewport
    assert pipeline.result.viewport.width == 640


def test_unlabelled_orders_still_get_a_bar():
    records = costed_orders(("A-1", 10)) + [make_order(cost=20)]

    pipeline = BarChartPipeline(records=records, clock=ManualClock())

    assert [b.category for b in pipeline.result.shapes.bars] == ["A-1", ""]
    assert pipeline.result.scales["x"].domain == ("A-1", "")


def test_build_pipeline_dispatches_on_kind():
    pipeline = build_pipeline(parse_chart_config({"kind": "bar"}), clock=ManualClock())
    assert isinstance(pipeline, BarChartPipeline)
    assert pipeline.result.shapes.bars == ()
