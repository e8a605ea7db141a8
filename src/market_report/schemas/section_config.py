"""Schemas for report section configuration."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SectionConfigResponse(BaseModel):
    """Series codes per report section and where they came from."""

    config: dict[str, list[str]]
    source: str


class SectionConfigUpdateRequest(BaseModel):
    """Request schema for replacing the series of one section."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    section_name: str = Field(min_length=1)
    series_codes: list[str]


class SectionConfigUpdateResponse(BaseModel):
    """Response schema after a section update."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    section_name: str
    series_codes: list[str]
