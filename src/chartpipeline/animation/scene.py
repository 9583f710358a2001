from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

from chartpipeline.animation.planner import (
    DEFAULT_DURATION,
    DEFAULT_EASING,
    PropertyTransition,
    TransitionState,
)

logger = logging.getLogger(__name__)

Props = Mapping[str, float]


class Scene:
    """Animated properties keyed by stable element identity.

    Each :meth:`update` diffs the new targets against the elements already in
    the scene: new elements start at their ``enter`` value (or directly at the
    target), existing ones retarget, and elements that disappeared are
    dropped. :meth:`frame` reports current values for every element.
    """

    def __init__(
        self, *, duration: float = DEFAULT_DURATION, easing: str = DEFAULT_EASING
    ) -> None:
        self.duration = duration
        self.easing = easing
        self._elements: dict[str, dict[str, PropertyTransition]] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def keys(self) -> list[str]:
        return list(self._elements)

    def transition(self, key: str, prop: str) -> PropertyTransition:
        return self._elements[key][prop]

    def update(
        self,
        targets: Mapping[str, Props],
        now: float,
        *,
        enter: Optional[Mapping[str, Props]] = None,
    ) -> None:
        enter = enter or {}
        for key in [k for k in self._elements if k not in targets]:
            del self._elements[key]
        for key, props in targets.items():
            element = self._elements.setdefault(key, {})
            start = enter.get(key, {})
            for prop, value in props.items():
                transition = element.get(prop)
                if transition is None:
                    transition = PropertyTransition(
                        start.get(prop, value), duration=self.duration, easing=self.easing
                    )
                    element[prop] = transition
                transition.set_target(value, now)
            for prop in [p for p in element if p not in props]:
                del element[prop]
        logger.debug("scene updated: %d elements", len(self._elements))

    def frame(self, now: float) -> dict[str, dict[str, float]]:
        return {
            key: {prop: transition.tick(now) for prop, transition in element.items()}
            for key, element in self._elements.items()
        }

    @property
    def animating(self) -> bool:
        return any(
            transition.state is TransitionState.ANIMATING
            for element in self._elements.values()
            for transition in element.values()
        )
