from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from chartpipeline.scales.ticks import format_number, nice, tick_step, ticks


def finite_values(values: Iterable[float]) -> list[float]:
    return [float(v) for v in values if v is not None and math.isfinite(v)]


@dataclass(frozen=True)
class LinearScale:
    """Continuous ``[d0, d1] -> [r0, r1]`` mapping.

    A degenerate domain (``d0 == d1``) maps every input to ``r0``, the
    baseline end of the range, so zero-valued marks stay flat.
    """

    domain: tuple[float, float]
    range: tuple[float, float]

    @classmethod
    def from_values(
        cls,
        values: Iterable[float],
        range: tuple[float, float],
        *,
        niced: bool = True,
        count: int = 10,
    ) -> "LinearScale":
        """Domain ``[0, max]``; non-finite values are ignored, never below 0."""
        finite = finite_values(values)
        upper = max([0.0, *finite])
        lower = 0.0
        if niced and upper > lower:
            lower, upper = nice(lower, upper, count)
        return cls(domain=(lower, upper), range=(float(range[0]), float(range[1])))

    @property
    def degenerate(self) -> bool:
        return self.domain[0] == self.domain[1]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if self.degenerate:
            return r0
        return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, position: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            return d0
        return d0 + (float(position) - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: int = 10) -> list[float]:
        return ticks(self.domain[0], self.domain[1], count)

    def tick_format(self, count: int = 10):
        d0, d1 = self.domain
        step = tick_step(d0, d1, count) if d0 != d1 else 1.0
        return lambda value: format_number(value, step)
