from __future__ import annotations


def fmt(value: float) -> str:
    rounded = round(float(value), 3)
    if rounded == int(rounded):
        return str(int(rounded))
    return repr(rounded)


def point(x: float, y: float) -> str:
    return f"{fmt(x)},{fmt(y)}"


class PathBuilder:
    """Accumulates SVG path commands."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def move_to(self, x: float, y: float) -> "PathBuilder":
        self._parts.append(f"M{point(x, y)}")
        return self

    def line_to(self, x: float, y: float) -> "PathBuilder":
        self._parts.append(f"L{point(x, y)}")
        return self

    def curve_to(
        self, x1: float, y1: float, x2: float, y2: float, x: float, y: float
    ) -> "PathBuilder":
        self._parts.append(f"C{point(x1, y1)},{point(x2, y2)},{point(x, y)}")
        return self

    def arc_to(
        self, r: float, large_arc: bool, sweep: bool, x: float, y: float
    ) -> "PathBuilder":
        self._parts.append(
            f"A{fmt(r)},{fmt(r)},0,{int(large_arc)},{int(sweep)},{point(x, y)}"
        )
        return self

    def close(self) -> "PathBuilder":
        self._parts.append("Z")
        return self

    def __str__(self) -> str:
        return "".join(self._parts)

