from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from chartpipeline.domain.record import FieldPath, as_field_path, is_missing
from chartpipeline.domain.series import RatioScalar
from chartpipeline.errors import DivisionByZero
from chartpipeline.pipeline.observability import Diagnostics
from chartpipeline.transforms.interfaces import ExtractorBase


class SameDayRatioExtractor(ExtractorBase[RatioScalar]):
    """Percentage of records whose two date fields are equal.

    Records missing either field count towards the total but never match,
    even when both are absent; strict equality of two absent values is not
    treated as a same-day approval.
    An empty input yields an undefined ratio and a ``DivisionByZero``
    condition instead of 0%.
    """

    mode = "ratio"

    def __init__(self, *, left: "str | FieldPath", right: "str | FieldPath") -> None:
        super().__init__()
        self.left = as_field_path(left)
        self.right = as_field_path(right)

    def _matches(self, record: Any) -> bool:
        a = self.left.read(record)
        b = self.right.read(record)
        if is_missing(a) or is_missing(b):
            return False
        return a == b

    def apply(self, records: Sequence[Any], diagnostics: Diagnostics) -> RatioScalar:
        total = len(records)
        if total == 0:
            diagnostics.signal(
                DivisionByZero(
                    f"ratio of {self.left} == {self.right} over zero records is undefined"
                )
            )
            return RatioScalar(percentage=None, matched=0, total=0)
        matched = sum(1 for record in records if self._matches(record))
        return RatioScalar(percentage=matched / total * 100, matched=matched, total=total)
