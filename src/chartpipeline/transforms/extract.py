from __future__ import annotations

from typing import Any, Mapping

from chartpipeline.pipeline.observability import Diagnostics
from chartpipeline.transforms.categorical import CategoricalValueExtractor
from chartpipeline.transforms.geo import GeoPointExtractor
from chartpipeline.transforms.interfaces import ExtractorBase
from chartpipeline.transforms.ratio import SameDayRatioExtractor
from chartpipeline.transforms.temporal import TemporalCountExtractor

_EXTRACTORS: dict[str, type[ExtractorBase]] = {
    TemporalCountExtractor.mode: TemporalCountExtractor,
    CategoricalValueExtractor.mode: CategoricalValueExtractor,
    SameDayRatioExtractor.mode: SameDayRatioExtractor,
    GeoPointExtractor.mode: GeoPointExtractor,
}


def build_extractor(mode: str, **fields: Any) -> ExtractorBase:
    try:
        cls = _EXTRACTORS[mode]
    except KeyError:
        available = ", ".join(sorted(_EXTRACTORS))
        raise ValueError(f"Unsupported extract mode: {mode!r} (available: {available})") from None
    return cls(**fields)


def extract(
    records: Any,
    field_spec: "ExtractorBase | Mapping[str, Any]",
    diagnostics: Diagnostics | None = None,
) -> Any:
    """Project ``records`` into a series according to ``field_spec``.

    ``field_spec`` is either an extractor instance or a mapping such as
    ``{"mode": "geo", "latitude": "...", "longitude": "..."}``.
    """
    if isinstance(field_spec, ExtractorBase):
        extractor = field_spec
    else:
        params = dict(field_spec)
        extractor = build_extractor(params.pop("mode"), **params)
    return extractor(records, diagnostics)
