"""Sample rows of the report tables for the database explorer."""

from fastapi import APIRouter, HTTPException, Query, status

from market_report.core.deps import DbSession
from market_report.schemas.sample import (
    SamplePointsResponse,
    SampleSeriesItem,
    SampleSeriesResponse,
    WeeklySummaryResponse,
)
from market_report.schemas.series import DataPoint
from market_report.services import sample as sample_service
from market_report.services import series_catalog as catalog_service
from market_report.services.series import QueryFailure

router = APIRouter(prefix="/api/sample", tags=["sample"])


@router.get("/finmaster", response_model=SampleSeriesResponse)
async def sample_series(db: DbSession) -> SampleSeriesResponse:
    """First master table rows ordered by code."""
    series = await catalog_service.get_all_series(db, limit=sample_service.SAMPLE_SERIES_LIMIT)
    return SampleSeriesResponse(
        count=len(series),
        data=[
            SampleSeriesItem(code=item.code, name=item.description, source=item.source)
            for item in series
        ],
    )


@router.get("/findata", response_model=SamplePointsResponse)
async def sample_points(
    db: DbSession,
    api_code: str | None = Query(None, alias="apiCode", description="Series code"),
) -> SamplePointsResponse:
    """Latest observations of one series, newest first."""
    if not api_code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="apiCode parameter is required",
        )

    try:
        points = await sample_service.get_latest_points(db, api_code)
    except QueryFailure as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return SamplePointsResponse(
        api_code=api_code,
        count=len(points),
        data=[DataPoint(date=point.date, value=point.value) for point in points],
    )


@router.get(
    "/weekly", response_model=WeeklySummaryResponse, response_model_exclude_none=True
)
async def sample_weekly_summary(db: DbSession) -> WeeklySummaryResponse:
    """The weekly summary with the latest end date."""
    try:
        summary = await sample_service.get_latest_weekly_summary(db)
    except QueryFailure as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    if summary is None:
        return WeeklySummaryResponse(message="No weekly summary found")
    return WeeklySummaryResponse(data=summary)
