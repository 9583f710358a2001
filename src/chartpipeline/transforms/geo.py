from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from chartpipeline.domain.record import MISSING, FieldPath, as_field_path
from chartpipeline.domain.series import GeoPoint
from chartpipeline.pipeline.observability import Diagnostics
from chartpipeline.transforms.interfaces import ExtractorBase
from chartpipeline.transforms.utils import to_number

logger = logging.getLogger(__name__)


class GeoPointExtractor(ExtractorBase[list[GeoPoint]]):
    """Pass latitude/longitude pairs through; skip records missing either."""

    mode = "geo"

    def __init__(
        self, *, latitude: "str | FieldPath", longitude: "str | FieldPath"
    ) -> None:
        super().__init__()
        self.latitude = as_field_path(latitude)
        self.longitude = as_field_path(longitude)

    def apply(self, records: Sequence[Any], diagnostics: Diagnostics) -> list[GeoPoint]:
        points: list[GeoPoint] = []
        for record in records:
            lat = self.latitude.read(record)
            lon = self.longitude.read(record)
            if lat is MISSING or lon is MISSING:
                self.skipped += 1
                continue
            points.append(
                GeoPoint(
                    latitude=to_number(lat, self.latitude),
                    longitude=to_number(lon, self.longitude),
                )
            )
        if self.skipped:
            logger.debug("skipped %d records without coordinates", self.skipped)
        return points
