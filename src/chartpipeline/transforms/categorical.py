from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from chartpipeline.domain.record import FieldPath, as_field_path
from chartpipeline.domain.series import CategoricalValuePoint
from chartpipeline.pipeline.observability import Diagnostics
from chartpipeline.transforms.interfaces import ExtractorBase
from chartpipeline.transforms.utils import to_label, to_number


class CategoricalValueExtractor(ExtractorBase[list[CategoricalValuePoint]]):
    """One point per record; duplicate categories are kept apart.

    A missing or non-finite value still produces a point (``nan``/``inf``);
    scales ignore such values when computing extents.
    """

    mode = "categorical_value"

    def __init__(self, *, label: "str | FieldPath", value: "str | FieldPath") -> None:
        super().__init__()
        self.label = as_field_path(label)
        self.value = as_field_path(value)

    def apply(
        self, records: Sequence[Any], diagnostics: Diagnostics
    ) -> list[CategoricalValuePoint]:
        return [
            CategoricalValuePoint(
                category=to_label(self.label.read(record), self.label),
                value=to_number(self.value.read(record), self.value),
            )
            for record in records
        ]
