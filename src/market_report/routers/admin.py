"""Admin endpoints for the series catalog and report section configuration."""

from fastapi import APIRouter, HTTPException, status

from market_report.core.deps import AdminAccess, DbSession
from market_report.schemas.catalog import SeriesCatalogItem, SeriesCatalogResponse
from market_report.schemas.section_config import (
    SectionConfigResponse,
    SectionConfigUpdateRequest,
    SectionConfigUpdateResponse,
)
from market_report.services import section_config as section_config_service
from market_report.services import series_catalog as catalog_service

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/series", response_model=SeriesCatalogResponse)
async def list_series(admin: AdminAccess, db: DbSession) -> SeriesCatalogResponse:
    """List all available series with descriptions. Admin only."""
    series = await catalog_service.get_all_series(db)
    return SeriesCatalogResponse(
        count=len(series),
        series=[SeriesCatalogItem.model_validate(item) for item in series],
    )


@router.get("/section-config", response_model=SectionConfigResponse)
async def get_section_config(db: DbSession) -> SectionConfigResponse:
    """
    Get the series codes shown in each report section.

    Readable without admin mode since the report pages need it.
    """
    config, source = await section_config_service.get_section_config(db)
    return SectionConfigResponse(config=config, source=source)


@router.post("/section-config", response_model=SectionConfigUpdateResponse)
async def update_section_config(
    admin: AdminAccess,
    db: DbSession,
    request: SectionConfigUpdateRequest,
) -> SectionConfigUpdateResponse:
    """
    Replace the series codes of one report section. Admin only.

    Fixed Income takes exactly 6 codes, every other section exactly 4.
    """
    try:
        config = await section_config_service.update_section_config(
            db, request.section_name, request.series_codes
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return SectionConfigUpdateResponse(
        section_name=config.section_name,
        series_codes=request.series_codes,
    )
