from __future__ import annotations

import math
from dataclasses import dataclass

HALF_TURN = (-math.pi / 2, math.pi / 2)


@dataclass(frozen=True)
class AngularScale:
    """Linear value-to-angle law for gauges, in radians.

    Values outside the domain extrapolate along the same line; nothing is
    clamped.
    """

    domain: tuple[float, float] = (0.0, 100.0)
    range: tuple[float, float] = HALF_TURN

    def __post_init__(self) -> None:
        if self.domain[0] == self.domain[1]:
            raise ValueError("angular scale needs min_value != max_value")

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        a0, a1 = self.range
        return a0 + (float(value) - d0) / (d1 - d0) * (a1 - a0)

    @property
    def start_angle(self) -> float:
        return self.range[0]

    @property
    def end_angle(self) -> float:
        return self.range[1]
