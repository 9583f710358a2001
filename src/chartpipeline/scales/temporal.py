from __future__ import annotations

import bisect
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from chartpipeline.scales.ticks import tick_step

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

SECOND = 1.0
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

# (unit, step, approximate duration in seconds), ascending.
TICK_INTERVALS: tuple[tuple[str, int, float], ...] = (
    ("second", 1, SECOND),
    ("second", 5, 5 * SECOND),
    ("second", 15, 15 * SECOND),
    ("second", 30, 30 * SECOND),
    ("minute", 1, MINUTE),
    ("minute", 5, 5 * MINUTE),
    ("minute", 15, 15 * MINUTE),
    ("minute", 30, 30 * MINUTE),
    ("hour", 1, HOUR),
    ("hour", 3, 3 * HOUR),
    ("hour", 6, 6 * HOUR),
    ("hour", 12, 12 * HOUR),
    ("day", 1, DAY),
    ("day", 2, 2 * DAY),
    ("week", 1, WEEK),
    ("month", 1, MONTH),
    ("month", 3, 3 * MONTH),
    ("year", 1, YEAR),
)
_DURATIONS = [interval[2] for interval in TICK_INTERVALS]
_FIXED_UNITS = {"second": SECOND, "minute": MINUTE, "hour": HOUR, "day": DAY}
# 1970-01-04 was a Sunday.
_WEEK_ORIGIN = 3 * DAY


def _seconds(value: datetime) -> float:
    return (value - EPOCH).total_seconds()


def _from_seconds(value: float) -> datetime:
    return EPOCH + timedelta(seconds=value)


def choose_interval(start: datetime, stop: datetime, count: int = 10) -> tuple[str, int]:
    target = abs(_seconds(stop) - _seconds(start)) / max(1, count)
    i = bisect.bisect_right(_DURATIONS, target)
    if i == len(TICK_INTERVALS):
        years = tick_step(start.year, stop.year, count)
        return "year", max(1, int(round(years)))
    if i == 0:
        return "second", 1
    before, after = TICK_INTERVALS[i - 1], TICK_INTERVALS[i]
    chosen = before if target / before[2] < after[2] / target else after
    return chosen[0], chosen[1]


def _month_ticks(start: datetime, stop: datetime, step: int) -> list[datetime]:
    year, month = start.year, start.month
    current = datetime(year, month, 1, tzinfo=timezone.utc)
    if current < start:
        month += 1
    out: list[datetime] = []
    while True:
        year += (month - 1) // 12
        month = (month - 1) % 12 + 1
        current = datetime(year, month, 1, tzinfo=timezone.utc)
        if current > stop:
            return out
        if (month - 1) % step == 0:
            out.append(current)
        month += 1


def _year_ticks(start: datetime, stop: datetime, step: int) -> list[datetime]:
    year = start.year
    if datetime(year, 1, 1, tzinfo=timezone.utc) < start:
        year += 1
    year += (-year) % step
    out: list[datetime] = []
    while year <= stop.year:
        out.append(datetime(year, 1, 1, tzinfo=timezone.utc))
        year += step
    return out


def time_ticks(start: datetime, stop: datetime, count: int = 10) -> list[datetime]:
    if stop < start:
        return time_ticks(stop, start, count)[::-1]
    if start == stop:
        return [start]
    unit, step = choose_interval(start, stop, count)
    if unit == "month":
        return _month_ticks(start, stop, step)
    if unit == "year":
        return _year_ticks(start, stop, step)
    if unit == "week":
        size, origin = WEEK * step, _WEEK_ORIGIN
    else:
        size, origin = _FIXED_UNITS[unit] * step, 0.0
    lo, hi = _seconds(start) - origin, _seconds(stop) - origin
    first = -(-lo // size) * size
    out = []
    tick = first
    while tick <= hi:
        out.append(_from_seconds(tick + origin))
        tick += size
    return out


def format_instant(value: datetime) -> str:
    """Pick the coarsest label that still distinguishes the tick."""
    if value.second or value.microsecond:
        return value.strftime(":%S")
    if value.minute:
        return value.strftime("%I:%M")
    if value.hour:
        return value.strftime("%I %p")
    if value.day != 1:
        return value.strftime("%b %d" if value.weekday() == 6 else "%a %d")
    if value.month != 1:
        return value.strftime("%B")
    return value.strftime("%Y")


@dataclass(frozen=True)
class TemporalScale:
    """Maps instants linearly onto ``range``.

    An empty or single-instant domain is degenerate: every instant maps to
    the range midpoint.
    """

    domain: tuple[datetime, datetime] | None
    range: tuple[float, float]

    @classmethod
    def from_instants(
        cls, instants: Iterable[datetime], range: tuple[float, float]
    ) -> "TemporalScale":
        values = list(instants)
        domain = (min(values), max(values)) if values else None
        return cls(domain=domain, range=(float(range[0]), float(range[1])))

    @property
    def degenerate(self) -> bool:
        return self.domain is None or self.domain[0] == self.domain[1]

    @property
    def midpoint(self) -> float:
        return (self.range[0] + self.range[1]) / 2

    def __call__(self, value: datetime) -> float:
        if self.degenerate:
            return self.midpoint
        d0, d1 = (_seconds(d) for d in self.domain)
        r0, r1 = self.range
        return r0 + (_seconds(value) - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, position: float) -> datetime | None:
        if self.domain is None:
            return None
        if self.degenerate or self.range[0] == self.range[1]:
            return self.domain[0]
        d0, d1 = (_seconds(d) for d in self.domain)
        r0, r1 = self.range
        return _from_seconds(d0 + (position - r0) / (r1 - r0) * (d1 - d0))

    def ticks(self, count: int = 10) -> list[datetime]:
        if self.domain is None:
            return []
        return time_ticks(self.domain[0], self.domain[1], count)
