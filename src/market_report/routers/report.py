"""Report series and treasury curve endpoints."""

import re
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from market_report.core.config import settings
from market_report.core.deps import CurveCache, DbSession
from market_report.schemas.series import DateRange, SeriesDataResponse
from market_report.schemas.yield_curve import YieldCurveResponse
from market_report.services import series as series_service
from market_report.services import yield_curve as curve_service

router = APIRouter(prefix="/api/report", tags=["report"])

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Table rows are flattened to {"date": ..., code: value}
RESERVED_CODES = frozenset({"date"})


def parse_series_codes(value: str, max_codes: int | None = None) -> list[str]:
    """Split a comma-separated code list, dropping blanks and repeats."""
    if max_codes is None:
        max_codes = settings.max_series_codes

    codes = list(dict.fromkeys(code.strip() for code in value.split(",") if code.strip()))
    if not codes or len(codes) > max_codes:
        raise ValueError(f"codes must contain 1-{max_codes} series codes")
    reserved = [code for code in codes if code in RESERVED_CODES]
    if reserved:
        raise ValueError(f"Reserved series code: {reserved[0]}")
    return codes


def parse_report_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD calendar date."""
    if not DATE_PATTERN.match(value):
        raise ValueError("Dates must be in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid calendar date: {value}") from exc


@router.get("/series", response_model=SeriesDataResponse)
async def get_series_data(
    db: DbSession,
    codes: str | None = Query(None, description="Comma-separated series codes"),
    start_date: str | None = Query(None, alias="startDate", description="YYYY-MM-DD"),
    end_date: str | None = Query(None, alias="endDate", description="YYYY-MM-DD"),
) -> SeriesDataResponse:
    """
    Get aligned series data for charts and tables.

    Returns per-series chart points, a date-indexed table with one column per
    code, display descriptions and latest/change summaries. Missing
    observations are null.
    """
    if not codes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="codes parameter is required (comma-separated)",
        )
    if not start_date or not end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="startDate and endDate parameters are required (YYYY-MM-DD)",
        )

    try:
        parsed_codes = parse_series_codes(codes)
        start = parse_report_date(start_date)
        end = parse_report_date(end_date)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    try:
        report = await series_service.get_aligned_data(db, parsed_codes, start, end)
    except series_service.QueryFailure as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    aligned = report.aligned
    return SeriesDataResponse(
        codes=list(aligned.codes),
        descriptions=dict(aligned.descriptions),
        chart_data={code: list(points) for code, points in aligned.chart_data.items()},
        table_data=[row.as_record() for row in aligned.table_data],
        summaries=dict(report.summaries),
        row_count=report.row_count,
        truncated=report.truncated,
        date_range=DateRange(start_date=start, end_date=end),
    )


@router.get("/treasury-curve", response_model=YieldCurveResponse)
async def get_treasury_curve(
    db: DbSession,
    cache: CurveCache,
    curve_date: date | None = Query(None, alias="date", description="Primary curve date"),
    compare: date | None = Query(None, description="Optional comparison date"),
    years: int | None = Query(None, ge=1, le=50, description="Years of history to load"),
    refresh: bool = Query(False, description="Bypass the cached treasury history"),
) -> YieldCurveResponse:
    """
    Get the treasury yield curve for a date and an optional comparison date.

    Dates without data resolve to the closest earlier available date.
    """
    try:
        report = await curve_service.load_treasury_series(
            db, cache, end_date=date.today(), years=years, refresh=refresh
        )
    except series_service.QueryFailure as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return curve_service.build_yield_curve(report, primary=curve_date, compare=compare)
