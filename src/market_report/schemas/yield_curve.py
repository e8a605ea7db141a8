"""Treasury yield curve schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from market_report.schemas.series import JsonDecimal


class CurvePoint(BaseModel):
    """Yields of one maturity on the primary and comparison dates."""

    maturity: str
    code: str
    curve1: JsonDecimal | None = None
    curve2: JsonDecimal | None = None


class YieldCurveResponse(BaseModel):
    """Yield curve for up to two dates."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    primary_date: date | None = None
    compare_date: date | None = None
    available_dates: list[date]
    points: list[CurvePoint]
