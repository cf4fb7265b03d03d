"""
Pydantic schemas for classified campaign charts.

These are the objects handed to the presentation layer. Dump with
``model_dump(mode="json", by_alias=True)`` to get the camelCase payload the
dashboard expects (renderType, heightHint, chartCount).
"""

from enum import Enum
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field


class RenderTypeEnum(str, Enum):
    """Chart render types understood by the dashboard"""
    BAR = "bar"
    PIE = "pie"
    LINE = "line"


class DataPoint(BaseModel):
    """Schema for a single named metric value"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Point label (device, platform, metric name...)")
    value: Union[int, float] = Field(..., description="Finite metric value")


class ChartSpec(BaseModel):
    """Schema for one renderable chart"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Stable chart identifier")
    title: str = Field(..., description="Chart title")
    subtitle: str = Field("", description="Chart subtitle")
    data: List[DataPoint] = Field(default_factory=list, description="Validated series")
    render_type: RenderTypeEnum = Field(
        RenderTypeEnum.BAR, alias="renderType", description="How the chart is drawn"
    )
    height_hint: int = Field(300, gt=0, alias="heightHint", description="Suggested height in pixels")


class CategoryResult(BaseModel):
    """Schema for a presentation category and its charts"""

    key: str = Field(..., description="Category key")
    title: str = Field(..., description="Category title")
    description: str = Field("", description="Category description")
    charts: List[ChartSpec] = Field(default_factory=list, description="Charts in declared order")


class CategorySummary(BaseModel):
    """Schema for the per-category summary record"""

    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(..., description="Category key")
    title: str = Field(..., description="Category title")
    chart_count: int = Field(..., ge=0, alias="chartCount", description="Number of charts")
