from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from chartpipeline.domain.record import MISSING, FieldPath, as_field_path
from chartpipeline.domain.series import TemporalCountPoint
from chartpipeline.pipeline.observability import Diagnostics
from chartpipeline.transforms.interfaces import ExtractorBase
from chartpipeline.transforms.utils import parse_instant

logger = logging.getLogger(__name__)


class TemporalCountExtractor(ExtractorBase[list[TemporalCountPoint]]):
    """Count records per exact date-string key.

    Keys are compared as raw strings, so ``"2024-01-01"`` and
    ``"2024-01-01T00:00:00Z"`` stay separate points. Records without the
    field are skipped. Output follows first-seen key order; sorting by
    instant is left to geometry.
    """

    mode = "temporal_count"

    def __init__(self, *, date: "str | FieldPath") -> None:
        super().__init__()
        self.date = as_field_path(date)

    def apply(
        self, records: Sequence[Any], diagnostics: Diagnostics
    ) -> list[TemporalCountPoint]:
        counts: dict[str, int] = {}
        instants: dict[str, Any] = {}
        for record in records:
            raw = self.date.read(record)
            if raw is MISSING or raw == "":
                self.skipped += 1
                continue
            key = raw if isinstance(raw, str) else str(raw)
            if key not in counts:
                instants[key] = parse_instant(raw, self.date)
                counts[key] = 0
            counts[key] += 1
        if self.skipped:
            logger.debug("skipped %d records without %s", self.skipped, self.date)
        return [
            TemporalCountPoint(key=key, instant=instants[key], count=count)
            for key, count in counts.items()
        ]
