from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from chartpipeline.domain.viewport import Viewport

SCALE_DIVISOR = 6.5
# Latitude at which the Mercator square closes.
MAX_LATITUDE = 85.0511287798
VERTICAL_CENTER_DIVISOR = 1.5


@dataclass(frozen=True)
class MercatorProjection:
    """Spherical Mercator: ``(longitude, latitude)`` degrees to pixels.

    Returns ``None`` for points that cannot be projected: non-finite input,
    latitude outside (-90, 90) or longitude outside [-180, 180].
    """

    scale: float
    translate: tuple[float, float]

    @classmethod
    def for_viewport(cls, viewport: Viewport) -> "MercatorProjection":
        return cls(
            scale=viewport.width / SCALE_DIVISOR,
            translate=(viewport.width / 2, viewport.height / VERTICAL_CENTER_DIVISOR),
        )

    def __call__(self, coordinates: tuple[float, float]) -> Optional[tuple[float, float]]:
        longitude, latitude = coordinates
        try:
            lon = float(longitude)
            lat = float(latitude)
        except (TypeError, ValueError):
            return None
        if not (math.isfinite(lon) and math.isfinite(lat)):
            return None
        if abs(lat) >= 90 or abs(lon) > 180:
            return None
        lam = math.radians(lon)
        phi = math.radians(lat)
        x = lam * self.scale + self.translate[0]
        y = -math.log(math.tan(math.pi / 4 + phi / 2)) * self.scale + self.translate[1]
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        return (x, y)

    def project_clamped(self, coordinates: tuple[float, float]) -> Optional[tuple[float, float]]:
        """Project with latitude clamped to the Mercator square, for outlines."""
        longitude, latitude = coordinates
        try:
            lat = float(latitude)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(lat):
            return None
        lat = max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))
        return self((longitude, lat))

    def invert(self, point: tuple[float, float]) -> tuple[float, float]:
        x, y = point
        lam = (x - self.translate[0]) / self.scale
        phi = 2 * math.atan(math.exp(-(y - self.translate[1]) / self.scale)) - math.pi / 2
        return (math.degrees(lam), math.degrees(phi))
