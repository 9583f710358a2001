from __future__ import annotations

from typing import Callable

Easing = Callable[[float], float]


def linear(t: float) -> float:
    return t


def quad_in_out(t: float) -> float:
    t *= 2
    return (t * t if t <= 1 else (t - 1) * (3 - t) + 1) / 2


def cubic_in_out(t: float) -> float:
    t *= 2
    return (t * t * t if t <= 1 else (t - 2) ** 3 + 2) / 2


def cubic_out(t: float) -> float:
    t -= 1
    return t * t * t + 1


EASINGS: dict[str, Easing] = {
    "linear": linear,
    "quad-in-out": quad_in_out,
    "cubic-in-out": cubic_in_out,
    "cubic-out": cubic_out,
}


def get_easing(name: str) -> Easing:
    try:
        return EASINGS[name]
    except KeyError:
        raise ValueError(
            f"Unsupported easing: {name!r} (available: {', '.join(EASINGS)})"
        ) from None
