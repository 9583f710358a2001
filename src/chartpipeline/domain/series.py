from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TemporalCountPoint:
    """One distinct date key and how many records carried it."""

    key: str
    instant: datetime
    count: int


@dataclass(frozen=True)
class CategoricalValuePoint:
    category: str
    value: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.value)


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RatioScalar:
    """Percentage in [0, 100], or ``None`` when the ratio is undefined.

    ``percentage`` is ``None`` only for an empty record set; a legitimate 0%
    is ``0.0`` with ``defined`` still true.
    """

    percentage: float | None
    matched: int
    total: int

    @property
    def defined(self) -> bool:
        return self.percentage is not None
