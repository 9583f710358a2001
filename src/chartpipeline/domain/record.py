from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from chartpipeline.errors import InvalidInputError


class _Missing:
    """Marker returned when a field path does not resolve."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def is_missing(value: Any) -> bool:
    return value is MISSING or value is None


_WRONG_SHAPE = object()


def _step(current: Any, part: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(part, MISSING)
    if isinstance(current, (str, bytes, int, float, bool, Sequence)):
        return _WRONG_SHAPE
    return getattr(current, part, MISSING)


@dataclass(frozen=True)
class FieldPath:
    """Dotted accessor into a nested record, e.g. ``orderInformation.orderDate``.

    Records can be mappings or plain objects. A path that stops early
    (absent key, ``None`` along the way) resolves to :data:`MISSING`. A path
    that tries to descend into a scalar raises :class:`InvalidInputError`.
    """

    path: str

    def __post_init__(self) -> None:
        if not self.path or any(not part for part in self.path.split(".")):
            raise ValueError(f"invalid field path: {self.path!r}")

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.path.split("."))

    def read(self, record: Any) -> Any:
        current = record
        for depth, part in enumerate(self.parts):
            if current is None or current is MISSING:
                return MISSING
            nxt = _step(current, part)
            if nxt is _WRONG_SHAPE:
                walked = ".".join(self.parts[:depth]) or "<record>"
                raise InvalidInputError(
                    f"field {self.path!r}: {walked!r} is a {type(current).__name__}, not an object"
                )
            current = nxt
        if current is None:
            return MISSING
        return current

    def __str__(self) -> str:
        return self.path


def as_field_path(value: "str | FieldPath") -> FieldPath:
    return value if isinstance(value, FieldPath) else FieldPath(value)


def ensure_records(records: Any) -> Sequence[Any]:
    """Return ``records`` if it is an array-like sequence of records."""
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Sequence):
        raise InvalidInputError(
            f"records must be a list of records, got {type(records).__name__}"
        )
    return records
