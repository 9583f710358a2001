from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Margins:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    margins: Margins = Margins()

    @property
    def inner_width(self) -> float:
        return max(0.0, self.width - self.margins.left - self.margins.right)

    @property
    def inner_height(self) -> float:
        return max(0.0, self.height - self.margins.top - self.margins.bottom)

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2, self.height / 2)

    @property
    def view_box(self) -> str:
        return f"0 0 {_fmt(self.width)} {_fmt(self.height)}"


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))
