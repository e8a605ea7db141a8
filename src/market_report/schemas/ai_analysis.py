"""Schemas for AI analysis endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AnalysisFolder(BaseModel):
    """A folder with the number of analyses it holds."""

    id: int
    name: str
    count: int


class AnalysisFolderListResponse(BaseModel):
    """Response schema for list of analysis folders."""

    count: int
    folders: list[AnalysisFolder]


class AnalysisListItem(BaseModel):
    """An analysis entry as shown in the week picker."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    label: str
    folder_id: int | None = None
    folder_name: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    created_at: datetime | None = None


class AnalysisListResponse(BaseModel):
    """Response schema for list of analysis entries."""

    count: int
    entries: list[AnalysisListItem]


class AnalysisDetailResponse(BaseModel):
    """Full analysis text split by asset class."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    macro_us: str = ""
    equities: str = ""
    fixed_income: str = ""
    other_assets: str = ""
    start_date: date | None = None
    end_date: date | None = None
    created_at: datetime | None = None
