"""Series pipeline records and report series API schemas."""

from datetime import date
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

# Decimals stay exact in Python and go out as JSON numbers
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class SeriesObservation(BaseModel):
    """One raw row returned by the query stage."""

    model_config = ConfigDict(frozen=True)

    code: str
    date: date
    value: Decimal | None = None
    description: str | None = None

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        if not v:
            raise ValueError("Series code cannot be empty")
        return v


class DataPoint(BaseModel):
    """A dated value of one series; value is None when nothing was observed."""

    model_config = ConfigDict(frozen=True)

    date: date
    value: JsonDecimal | None = None


class TableRow(BaseModel):
    """One date of the wide table with one value column per requested code."""

    model_config = ConfigDict(frozen=True)

    date: date
    values: dict[str, Decimal | None]

    def as_record(self) -> dict[str, Any]:
        """Flatten to ``{"date": ..., code: value, ...}``."""
        return {"date": self.date, **self.values}


class SeriesSummary(BaseModel):
    """Latest value, its date and change since the earliest value in the window."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    latest_value: JsonDecimal | None = None
    latest_date: date | None = None
    change: JsonDecimal | None = None


class DateRange(BaseModel):
    """Requested inclusive date window."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start_date: date
    end_date: date


class SeriesDataResponse(BaseModel):
    """Response schema for aligned series data."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    codes: list[str]
    descriptions: dict[str, str]
    chart_data: dict[str, list[DataPoint]]
    table_data: list[dict[str, date | JsonDecimal | None]]
    summaries: dict[str, SeriesSummary]
    row_count: int
    truncated: bool
    date_range: DateRange
