from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from chartpipeline.domain.record import ensure_records
from chartpipeline.pipeline.observability import Diagnostics, ensure_diagnostics

TOut = TypeVar("TOut")


class ExtractorBase(ABC, Generic[TOut]):
    """Base interface for projecting a record array into a typed series."""

    mode: str = ""

    def __init__(self) -> None:
        self.skipped = 0

    def __call__(self, records: Any, diagnostics: Diagnostics | None = None) -> TOut:
        rows = ensure_records(records)
        self.skipped = 0
        return self.apply(rows, ensure_diagnostics(diagnostics))

    @abstractmethod
    def apply(self, records: Sequence[Any], diagnostics: Diagnostics) -> TOut:
        ...
