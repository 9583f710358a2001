from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Literal, Optional

from chartpipeline.errors import DegenerateDomainWarning
from chartpipeline.pipeline.observability import Diagnostics
from chartpipeline.scales.angular import HALF_TURN, AngularScale
from chartpipeline.scales.band import BandScale
from chartpipeline.scales.linear import LinearScale, finite_values
from chartpipeline.scales.temporal import TemporalScale

logger = logging.getLogger(__name__)

ScaleKind = Literal["temporal", "linear", "band", "angular"]


def resolve_scale(
    series: Sequence[Any],
    accessor: Callable[[Any], Any],
    range: tuple[float, float],
    kind: ScaleKind,
    *,
    padding: float = 0.1,
    domain: Optional[tuple[float, float]] = None,
    nice: bool = True,
    diagnostics: Optional[Diagnostics] = None,
):
    """Build a fresh, immutable scale for ``series`` over ``range``.

    ``accessor`` pulls the domain value out of each point. ``domain`` is only
    used by ``angular`` scales (default ``(0, 100)``). Degenerate domains are
    reported on ``diagnostics`` and resolved by the scale's own fallback.
    """
    if kind == "temporal":
        scale = TemporalScale.from_instants((accessor(p) for p in series), range)
        degenerate = scale.degenerate
    elif kind == "linear":
        values = [accessor(p) for p in series]
        scale = LinearScale.from_values(values, range, niced=nice)
        degenerate = scale.degenerate
        dropped = len(values) - len(finite_values(values))
        if dropped:
            logger.debug("ignored %d non-finite values in linear extent", dropped)
    elif kind == "band":
        scale = BandScale.from_categories((accessor(p) for p in series), range, padding)
        degenerate = scale.degenerate
    elif kind == "angular":
        scale = AngularScale(domain=domain or (0.0, 100.0), range=range or HALF_TURN)
        degenerate = False
    else:
        raise ValueError(f"Unsupported scale kind: {kind!r}")

    if degenerate and diagnostics is not None:
        diagnostics.signal(
            DegenerateDomainWarning(
                f"{kind} scale has a degenerate domain over {len(series)} points",
                scale=kind,
                size=len(series),
            )
        )
    return scale
