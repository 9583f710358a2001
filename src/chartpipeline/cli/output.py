from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from chartpipeline.pipeline.charts import RenderResult


def result_payload(result: RenderResult) -> dict[str, Any]:
    viewport = result.viewport
    return {
        "kind": result.shapes.kind,
        "viewport": {
            "width": viewport.width,
            "height": viewport.height,
            "inner_width": viewport.inner_width,
            "inner_height": viewport.inner_height,
        },
        "shapes": asdict(result.shapes),
        "diagnostics": result.diagnostics.counts,
    }


def to_json(result: RenderResult, *, indent: int | None = 2) -> str:
    return json.dumps(result_payload(result), ensure_ascii=False, indent=indent, default=str)


def print_summary(result: RenderResult, *, file=None) -> None:
    from rich.console import Console
    from rich.table import Table

    console = Console(file=file, markup=True)
    shapes = result.shapes
    table = Table(title=f"{shapes.kind} chart", show_header=True, header_style="bold")
    table.add_column("item", style="cyan")
    table.add_column("value")
    table.add_row("viewBox", shapes.view_box)
    table.add_row(
        "inner area",
        f"{result.viewport.inner_width:g} x {result.viewport.inner_height:g}",
    )
    if shapes.area is not None:
        table.add_row("area points", str(len(shapes.area.points)))
    if shapes.kind == "bar":
        table.add_row("bars", str(len(shapes.bars)))
    if shapes.gauge is not None:
        table.add_row("gauge label", shapes.gauge.label or "undefined")
    if shapes.map is not None:
        table.add_row("markers", str(len(shapes.map.markers)))
        table.add_row("dropped", str(shapes.map.dropped))
    for axis in shapes.axes:
        table.add_row(f"{axis.orient} ticks", ", ".join(t.label for t in axis.ticks))
    for kind, count in sorted(result.diagnostics.counts.items()):
        table.add_row(f"[yellow]{kind}[/yellow]", str(count))
    console.print(table)
