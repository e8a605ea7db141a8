"""Schemas for the series catalog."""

from pydantic import BaseModel


class SeriesCatalogItem(BaseModel):
    """A series available in the master table."""

    code: str
    description: str | None
    source: str | None

    model_config = {"from_attributes": True}


class SeriesCatalogResponse(BaseModel):
    """Response schema for list of available series."""

    count: int
    series: list[SeriesCatalogItem]
