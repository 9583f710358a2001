"""Tick arithmetic shared by the numeric scales.

Increments follow the usual 1-2-5 progression: the raw step
``extent / count`` is snapped to 1, 2, 5 or 10 times a power of ten.
"""
from __future__ import annotations

import math

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = 10 ** -power / factor
        i1 = round(start * inc)
        i2 = round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10**power * factor
        i1 = round(start / inc)
        i2 = round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def tick_increment(start: float, stop: float, count: float) -> float:
    """Signed increment: positive is a step, negative is ``-1 / step``."""
    if stop == start or count <= 0:
        return 0.0
    return _tick_spec(start, stop, count)[2]


def tick_step(start: float, stop: float, count: float) -> float:
    reverse = stop < start
    inc = tick_increment(stop, start, count) if reverse else tick_increment(start, stop, count)
    step = -1 / inc if inc < 0 else inc
    return -step if reverse else step


def ticks(start: float, stop: float, count: int = 10) -> list[float]:
    if count <= 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    lo, hi = (stop, start) if reverse else (start, stop)
    i1, i2, inc = _tick_spec(lo, hi, count)
    if i2 < i1:
        return []
    n = i2 - i1 + 1
    if inc < 0:
        out = [(i1 + i) / -inc for i in range(n)]
    else:
        out = [(i1 + i) * inc for i in range(n)]
    return out[::-1] if reverse else out


def nice(start: float, stop: float, count: int = 10) -> tuple[float, float]:
    """Extend ``[start, stop]`` outward to round tick boundaries."""
    if stop < start:
        hi, lo = nice(stop, start, count)
        return lo, hi
    lo, hi = start, stop
    prestep = None
    for _ in range(10):
        step = tick_increment(lo, hi, count)
        if step == prestep:
            break
        if step > 0:
            lo = math.floor(lo / step) * step
            hi = math.ceil(hi / step) * step
        elif step < 0:
            lo = math.ceil(lo * step) / step
            hi = math.floor(hi * step) / step
        else:
            break
        prestep = step
    # Float rounding must never cut the data extent.
    return min(lo, start), max(hi, stop)


def precision_fixed(step: float) -> int:
    step = abs(step)
    if step == 0 or not math.isfinite(step):
        return 0
    return max(0, -math.floor(math.log10(step)))


def format_number(value: float, step: float) -> str:
    return f"{value:,.{precision_fixed(step)}f}"
