import math
from datetime import datetime, timezone
from decimal import Decimal
from numbers import Real
from typing import Any

from chartpipeline.domain.record import MISSING, FieldPath
from chartpipeline.errors import InvalidInputError


def parse_instant(value: Any, path: FieldPath) -> datetime:
    """Parse an ISO-8601 date string; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidInputError(
                f"field {path}: cannot parse date {value!r}"
            ) from exc
    else:
        raise InvalidInputError(
            f"field {path}: expected a date string, got {type(value).__name__}"
        )
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_number(value: Any, path: FieldPath) -> float:
    if value is MISSING:
        return math.nan
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidInputError(
            f"field {path}: expected a number, got {type(value).__name__}"
        )
    return float(value)


MISSING_LABEL = ""


def to_label(value: Any, path: FieldPath) -> str:
    """Category label; an absent label becomes its own empty-string band."""
    if value is MISSING:
        return MISSING_LABEL
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidInputError(
            f"field {path}: expected a string label, got {type(value).__name__}"
        )
    return str(value)
