from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from chartpipeline.errors import ChartWarning


@dataclass(frozen=True)
class PipelineEvent:
    type: str
    payload: Mapping[str, object]


# Observer receives a structured event.
Observer = Callable[[PipelineEvent], None]
# Factory builds an observer for a given logger (may return None if not active at current level).
ObserverFactory = Callable[[logging.Logger], Optional[Observer]]


class ObserverRegistry:
    def __init__(self, factories: Optional[Mapping[str, ObserverFactory]] = None) -> None:
        self._factories: dict[str, ObserverFactory] = dict(factories or {})

    def register(self, name: str, factory: ObserverFactory) -> None:
        self._factories[name] = factory

    def get(self, name: str, logger: logging.Logger) -> Optional[Observer]:
        factory = self._factories.get(name)
        if not factory:
            return None
        return factory(logger)


def _condition_log_factory(logger: logging.Logger) -> Optional[Observer]:
    if not logger.isEnabledFor(logging.WARNING):
        return None

    warned: set[str] = set()

    def _observer(event: PipelineEvent) -> None:
        if event.type != "condition":
            return
        kind = event.payload.get("kind")
        message = event.payload.get("message")
        count = event.payload.get("count")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s: %s", kind, message)
        elif isinstance(kind, str) and kind not in warned:
            # Warn once per condition kind; later occurrences only bump the count.
            warned.add(kind)
            logger.warning("%s: %s (occurrence %s)", kind, message, count)

    return _observer


def default_observer_registry() -> ObserverRegistry:
    registry = ObserverRegistry()
    registry.register("conditions", _condition_log_factory)
    return registry


class Diagnostics:
    """Per-run collector for non-fatal conditions.

    Components call :meth:`signal`; the condition is recorded, forwarded to the
    optional observer and logged through the registry's ``conditions``
    observer. Nothing is raised.
    """

    def __init__(
        self,
        observer: Optional[Observer] = None,
        *,
        logger: Optional[logging.Logger] = None,
        registry: Optional[ObserverRegistry] = None,
    ) -> None:
        self.conditions: list[ChartWarning] = []
        self._counts: dict[str, int] = {}
        self._observer = observer
        registry = registry or default_observer_registry()
        self._log_observer = registry.get(
            "conditions", logger or logging.getLogger("chartpipeline")
        )

    def signal(self, condition: ChartWarning) -> None:
        self.conditions.append(condition)
        self._counts[condition.kind] = self._counts.get(condition.kind, 0) + 1
        event = PipelineEvent(
            type="condition",
            payload={
                "kind": condition.kind,
                "message": condition.message,
                "count": self._counts[condition.kind],
                "condition": condition,
            },
        )
        if self._log_observer is not None:
            self._log_observer(event)
        if self._observer is not None:
            self._observer(event)

    def count(self, kind: "str | type[ChartWarning]") -> int:
        key = kind if isinstance(kind, str) else kind.kind
        return self._counts.get(key, 0)

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self.conditions)


def ensure_diagnostics(diagnostics: Optional[Diagnostics]) -> Diagnostics:
    return diagnostics if diagnostics is not None else Diagnostics()
