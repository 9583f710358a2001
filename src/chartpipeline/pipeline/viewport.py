from __future__ import annotations

import logging
from typing import Callable, Optional

from chartpipeline.domain.viewport import Viewport

logger = logging.getLogger(__name__)

# Maps an observed container size (either side may be unknown) to a viewport.
ViewportPolicy = Callable[[Optional[float], Optional[float]], Viewport]
ViewportListener = Callable[[Viewport], None]


class ViewportManager:
    """Turns container size notifications into viewport emissions.

    The initial viewport is emitted synchronously from ``__init__``. Later
    observations emit only when the computed viewport differs from the last
    one emitted.
    """

    def __init__(
        self,
        policy: ViewportPolicy,
        *,
        width: Optional[float] = None,
        height: Optional[float] = None,
        listener: Optional[ViewportListener] = None,
    ) -> None:
        self._policy = policy
        self._listeners: list[ViewportListener] = []
        if listener is not None:
            self._listeners.append(listener)
        self.emitted = 0
        initial = policy(width, height)
        self._emit(initial)
        self._current = initial

    @property
    def current(self) -> Viewport:
        return self._current

    def subscribe(self, listener: ViewportListener) -> None:
        self._listeners.append(listener)

    def observe(
        self, width: Optional[float], height: Optional[float] = None
    ) -> Optional[Viewport]:
        candidate = self._policy(width, height)
        if candidate == self._current:
            logger.debug("viewport unchanged at %sx%s", candidate.width, candidate.height)
            return None
        self._emit(candidate)
        # Committed after the listeners: a failed render retries on the same size.
        self._current = candidate
        return candidate

    def _emit(self, viewport: Viewport) -> None:
        for listener in list(self._listeners):
            listener(viewport)
        self.emitted += 1
