"""Schemas for sample table rows."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from market_report.schemas.series import DataPoint


class SampleSeriesItem(BaseModel):
    """A master table row as shown by the explorer."""

    code: str
    name: str | None = None
    source: str | None = None


class SampleSeriesResponse(BaseModel):
    count: int
    data: list[SampleSeriesItem]


class SamplePointsResponse(BaseModel):
    """Most recent observations of one series, newest first."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    api_code: str
    count: int
    data: list[DataPoint]


class WeeklySummaryResponse(BaseModel):
    """The latest weekly summary row, or a message when there is none."""

    data: dict[str, Any] | None = None
    message: str | None = None
