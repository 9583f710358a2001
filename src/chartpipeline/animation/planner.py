from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from chartpipeline.animation.easing import get_easing

DEFAULT_DURATION = 0.25
DEFAULT_EASING = "cubic-in-out"


class TransitionState(str, Enum):
    IDLE = "idle"
    ANIMATING = "animating"


@dataclass(frozen=True)
class AnimationState:
    from_value: float
    to_value: float
    started_at: float
    duration: float
    easing: str = DEFAULT_EASING

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, max(0.0, (now - self.started_at) / self.duration))

    def value_at(self, now: float) -> float:
        t = get_easing(self.easing)(self.progress(now))
        return self.from_value + (self.to_value - self.from_value) * t

    def finished(self, now: float) -> bool:
        return self.progress(now) >= 1.0


class PropertyTransition:
    """Idle -> Animating -> Idle state machine for one numeric property.

    Time is whatever clock the caller ticks with, in seconds. A new target
    while animating restarts from the current interpolated value, so the
    rendered value never jumps. There is no queue: the latest target wins.
    """

    def __init__(
        self,
        value: float,
        *,
        duration: float = DEFAULT_DURATION,
        easing: str = DEFAULT_EASING,
    ) -> None:
        get_easing(easing)
        if duration < 0:
            raise ValueError("duration must be >= 0")
        self._value = float(value)
        self._animation: Optional[AnimationState] = None
        self.duration = duration
        self.easing = easing

    @property
    def state(self) -> TransitionState:
        return TransitionState.IDLE if self._animation is None else TransitionState.ANIMATING

    @property
    def animation(self) -> Optional[AnimationState]:
        return self._animation

    @property
    def target(self) -> float:
        return self._value if self._animation is None else self._animation.to_value

    def value_at(self, now: float) -> float:
        if self._animation is None:
            return self._value
        return self._animation.value_at(now)

    def set_target(self, target: float, now: float) -> None:
        target = float(target)
        if target == self.target:
            return
        current = self.value_at(now)
        self._animation = AnimationState(
            from_value=current,
            to_value=target,
            started_at=now,
            duration=self.duration,
            easing=self.easing,
        )
        if self.duration == 0:
            self.tick(now)

    def tick(self, now: float) -> float:
        """Advance to ``now``; pins the target and goes idle once finished."""
        if self._animation is None:
            return self._value
        if self._animation.finished(now):
            self._value = self._animation.to_value
            self._animation = None
            return self._value
        return self._animation.value_at(now)
