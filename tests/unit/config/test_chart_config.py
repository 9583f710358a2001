import logging
import math

import pytest
from pydantic import ValidationError

from chartpipeline.config.charts import (
    AreaChartConfig,
    BarChartConfig,
    GaugeChartConfig,
    MapChartConfig,
    default_config,
    load_chart_config,
    parse_chart_config,
)
from chartpipeline.config.resolution import cascade, resolve_log_level
from chartpipeline.utils.load import load_records


def test_defaults_per_chart_kind():
    area = default_config("area")
    assert isinstance(area, AreaChartConfig)
    assert area.date_field == "orderInformation.orderDate"
    assert area.aspect_ratio == 0.5

    bar = default_config("bar")
    assert isinstance(bar, BarChartConfig)
    assert (bar.width, bar.height, bar.min_step) == (800, 400, 40)

    gauge = default_config("gauge")
    assert isinstance(gauge, GaugeChartConfig)
    assert gauge.start_angle == pytest.approx(-math.pi / 2)
    assert gauge.tick_values == (0, 25, 50, 75, 100)

    chart_map = default_config("map")
    assert isinstance(chart_map, MapChartConfig)
    assert chart_map.regions == "countries"
    assert chart_map.transition.duration == 0.25


def test_transition_settings_are_validated():
    cfg = parse_chart_config(
        {"kind": "bar", "transition": {"duration_ms": 500, "easing": "linear"}}
    )
    assert cfg.transition.duration == 0.5

    with pytest.raises(ValidationError, match="easing"):
        parse_chart_config({"kind": "bar", "transition": {"easing": "bounce"}})
    with pytest.raises(ValidationError):
        parse_chart_config({"kind": "bar", "transition": {"duration_ms": -1}})


def test_unknown_kind_is_rejected():
    with pytest.raises(ValidationError):
        parse_chart_config({"kind": "pie"})


@pytest.mark.parametrize(
    "overrides",
    [
        {"min_value": 10, "max_value": 10},
        {"size": 40, "arc_thickness": 20},
    ],
)
def test_gauge_geometry_must_be_drawable(overrides):
    with pytest.raises(ValidationError):
        parse_chart_config({"kind": "gauge", **overrides})


def test_blank_strings_become_unset():
    cfg = parse_chart_config({"kind": "map", "topology_path": "   "})
    assert cfg.topology_path is None


def test_bar_padding_must_leave_room_for_bars():
    with pytest.raises(ValidationError):
        parse_chart_config({"kind": "bar", "padding": 1})


def test_load_chart_config_from_yaml(tmp_path):
    path = tmp_path / "bar.yaml"
    path.write_text(
        "kind: bar\nlabel_field: meta.name\nmargins:\n  left: 10\n", encoding="utf-8"
    )

    cfg = load_chart_config(path)

    assert cfg.kind == "bar"
    assert cfg.label_field == "meta.name"
    assert cfg.margins.to_margins().left == 10
    assert cfg.margins.top == 0


def test_load_chart_config_requires_kind(tmp_path):
    path = tmp_path / "chart.yaml"
    path.write_text("width: 300\n", encoding="utf-8")
    with pytest.raises(ValueError, match="kind"):
        load_chart_config(path)


def test_load_chart_config_requires_mapping(tmp_path):
    path = tmp_path / "chart.yaml"
    path.write_text("- bar\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_chart_config(path)


def test_load_records_reads_arrays_and_json_lines(tmp_path):
    array = tmp_path / "orders.json"
    array.write_text('[{"a": 1}, {"a": 2}]', encoding="utf-8")
    lines = tmp_path / "orders.jsonl"
    lines.write_text('{"a": 1}\n\n{"a": 2}\n', encoding="utf-8")

    assert load_records(array) == [{"a": 1}, {"a": 2}]
    assert load_records(lines) == [{"a": 1}, {"a": 2}]


def test_load_records_rejects_non_arrays(tmp_path):
    path = tmp_path / "orders.json"
    path.write_text('{"a": 1}', encoding="utf-8")
    with pytest.raises(TypeError):
        load_records(path)


def test_cascade_prefers_first_non_null():
    assert cascade(None, "cli", "cfg") == "cli"
    assert cascade(None, None, fallback="default") == "default"


def test_resolve_log_level_normalizes_names():
    assert resolve_log_level(None, "debug").value == logging.DEBUG
    assert resolve_log_level(None, None).name == "WARNING"
    assert resolve_log_level(logging.INFO).name == "INFO"
    assert resolve_log_level("chatty").value == logging.WARNING


def test_field_paths_are_trimmed_and_kind_still_dispatches():
    cfg = parse_chart_config({"kind": "area", "date_field": "  meta.created  "})
    assert isinstance(cfg, AreaChartConfig)
    assert cfg.date_field == "meta.created"

    with pytest.raises(ValidationError):
        parse_chart_config({"kind": "bar", "label_field": "   "})
