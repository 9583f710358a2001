from chartpipeline.transforms.extract import (
    CategoricalValueExtractor,
    GeoPointExtractor,
    SameDayRatioExtractor,
    TemporalCountExtractor,
    build_extractor,
    extract,
)

__all__ = [
    "CategoricalValueExtractor",
    "GeoPointExtractor",
    "SameDayRatioExtractor",
    "TemporalCountExtractor",
    "build_extractor",
    "extract",
]
