from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional


def unique_in_order(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class BandScale:
    """Equal-width bands over ``range``, one per distinct category.

    ``step = extent / n`` and ``bandwidth = step * (1 - padding)``; each band
    sits centred in its step so the gap is split evenly on both sides.
    """

    domain: tuple[str, ...]
    range: tuple[float, float]
    padding: float = 0.1

    def __post_init__(self) -> None:
        if not 0.0 <= self.padding < 1.0:
            raise ValueError("padding must be in [0, 1)")

    @classmethod
    def from_categories(
        cls, categories: Iterable[str], range: tuple[float, float], padding: float = 0.1
    ) -> "BandScale":
        return cls(
            domain=unique_in_order(categories),
            range=(float(range[0]), float(range[1])),
            padding=padding,
        )

    @property
    def degenerate(self) -> bool:
        return not self.domain

    @property
    def step(self) -> float:
        if not self.domain:
            return 0.0
        return (self.range[1] - self.range[0]) / len(self.domain)

    @property
    def bandwidth(self) -> float:
        return self.step * (1.0 - self.padding)

    def index(self, category: str) -> Optional[int]:
        try:
            return self.domain.index(category)
        except ValueError:
            return None

    def __call__(self, category: str) -> Optional[float]:
        idx = self.index(category)
        if idx is None:
            return None
        return self.range[0] + idx * self.step + (self.step - self.bandwidth) / 2

    def center(self, category: str) -> Optional[float]:
        start = self(category)
        return None if start is None else start + self.bandwidth / 2
