from __future__ import annotations

import math
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator

from chartpipeline.domain.viewport import Margins
from chartpipeline.utils.load import load_yaml

EASING_CHOICES = ("linear", "quad-in-out", "cubic-in-out", "cubic-out")


class MarginsConfig(BaseModel):
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    def to_margins(self) -> Margins:
        return Margins(top=self.top, right=self.right, bottom=self.bottom, left=self.left)


class TransitionConfig(BaseModel):
    duration_ms: float = Field(default=250.0, ge=0)
    easing: str = "cubic-in-out"

    @field_validator("easing")
    @classmethod
    def _known_easing(cls, value: str) -> str:
        if value not in EASING_CHOICES:
            raise ValueError(
                f"easing must be one of {', '.join(EASING_CHOICES)}, got {value!r}"
            )
        return value

    @property
    def duration(self) -> float:
        return self.duration_ms / 1000.0


class _ChartConfigBase(BaseModel):
    transition: TransitionConfig = Field(default_factory=TransitionConfig)

    @field_validator(
        "date_field",
        "label_field",
        "value_field",
        "buyer_field",
        "supplier_field",
        "latitude_field",
        "longitude_field",
        "regions",
        "topology_path",
        mode="before",
        check_fields=False,
    )
    @classmethod
    def _strip_paths(cls, value: object):
        if isinstance(value, str):
            text = value.strip()
            return text if text else None
        return value


class AreaChartConfig(_ChartConfigBase):
    kind: Literal["area"] = "area"
    date_field: str = "orderInformation.orderDate"
    default_width: float = Field(default=800.0, gt=0)
    aspect_ratio: float = Field(default=0.5, gt=0, description="height = width * aspect_ratio")
    margins: MarginsConfig = Field(
        default_factory=lambda: MarginsConfig(top=20, right=30, bottom=30, left=40)
    )


class BarChartConfig(_ChartConfigBase):
    kind: Literal["bar"] = "bar"
    label_field: str = "orderInformation.orderNumber"
    value_field: str = "paymentInformation.totalOrderCost"
    width: float = Field(default=800.0, gt=0)
    height: float = Field(default=400.0, gt=0)
    padding: float = Field(default=0.1, ge=0, lt=1)
    min_step: float = Field(default=40.0, ge=0, description="minimum band step in px")
    margins: MarginsConfig = Field(
        default_factory=lambda: MarginsConfig(top=20, right=30, bottom=40, left=60)
    )


class GaugeChartConfig(_ChartConfigBase):
    kind: Literal["gauge"] = "gauge"
    buyer_field: str = "approval.buyerApprovalDate"
    supplier_field: str = "approval.supplierApprovalDate"
    size: float = Field(default=220.0, gt=0)
    arc_thickness: float = Field(default=20.0, gt=0)
    min_value: float = 0.0
    max_value: float = 100.0
    start_angle: float = -math.pi / 2
    end_angle: float = math.pi / 2
    tick_values: tuple[float, ...] = (0, 25, 50, 75, 100)
    tick_bias: float = 150.0

    @model_validator(mode="after")
    def _check_geometry(self) -> "GaugeChartConfig":
        if self.min_value == self.max_value:
            raise ValueError("min_value and max_value must differ")
        if self.arc_thickness >= self.size / 2:
            raise ValueError("arc_thickness must be smaller than the gauge radius")
        return self


class MapChartConfig(_ChartConfigBase):
    kind: Literal["map"] = "map"
    latitude_field: str = "buyerInformation.coordinates.latitude"
    longitude_field: str = "buyerInformation.coordinates.longitude"
    default_width: float = Field(default=960.0, gt=0)
    default_height: float = Field(default=500.0, gt=0)
    marker_radius: float = Field(default=4.0, gt=0)
    regions: str = "countries"
    topology_path: Optional[str] = None


ChartConfig = Annotated[
    Union[AreaChartConfig, BarChartConfig, GaugeChartConfig, MapChartConfig],
    Field(discriminator="kind"),
]

_CHART_CONFIG = TypeAdapter(ChartConfig)


def parse_chart_config(data: dict) -> ChartConfig:
    return _CHART_CONFIG.validate_python(data)


def default_config(kind: str) -> ChartConfig:
    return parse_chart_config({"kind": kind})


def load_chart_config(path: Path) -> ChartConfig:
    """Load a chart config from YAML; ``kind`` selects the model."""
    data = load_yaml(Path(path))
    if "kind" not in data:
        raise ValueError(f"chart config {path} is missing 'kind'")
    return parse_chart_config(data)
