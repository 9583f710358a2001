from __future__ import annotations

from typing import Any


class ChartError(Exception):
    """Base class for fatal pipeline errors."""


class InvalidInputError(ChartError, ValueError):
    """Input records (or a field inside them) have the wrong shape."""


class ChartWarning(UserWarning):
    """Base class for non-fatal pipeline conditions.

    Conditions are never raised by the pipeline; they are collected on a
    :class:`chartpipeline.pipeline.observability.Diagnostics` instance.
    """

    kind = "warning"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class DegenerateDomainWarning(ChartWarning):
    kind = "degenerate_domain"


class ProjectionFailure(ChartWarning):
    kind = "projection_failure"


class DivisionByZero(ChartWarning):
    kind = "division_by_zero"
