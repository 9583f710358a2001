from chartpipeline.scales.angular import AngularScale
from chartpipeline.scales.band import BandScale
from chartpipeline.scales.linear import LinearScale
from chartpipeline.scales.projection import MercatorProjection
from chartpipeline.scales.resolve import resolve_scale
from chartpipeline.scales.temporal import TemporalScale

__all__ = [
    "AngularScale",
    "BandScale",
    "LinearScale",
    "MercatorProjection",
    "TemporalScale",
    "resolve_scale",
]
