"""Treasury yield curve built on the aligned series pipeline."""

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from market_report.core.config import settings
from market_report.schemas.series import DataPoint
from market_report.schemas.yield_curve import CurvePoint, YieldCurveResponse
from market_report.services.cache import TTLCache
from market_report.services.series import SeriesReport, get_aligned_data

logger = logging.getLogger(__name__)

# Constant maturity treasury series, shortest maturity first
TREASURY_MATURITIES: dict[str, str] = {
    "DGS1": "1Y",
    "DGS2": "2Y",
    "DGS5": "5Y",
    "DGS7": "7Y",
    "DGS10": "10Y",
    "DGS20": "20Y",
    "DGS30": "30Y",
}
TREASURY_CODES: tuple[str, ...] = tuple(TREASURY_MATURITIES)


def years_before(day: date, years: int) -> date:
    """Same calendar day ``years`` earlier; Feb 29 maps to Feb 28."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def available_dates(report: SeriesReport) -> list[date]:
    """Dates with at least one treasury data point, most recent first."""
    dates = {point.date for points in report.aligned.chart_data.values() for point in points}
    return sorted(dates, reverse=True)


def resolve_curve_date(requested: date | None, available: Sequence[date]) -> date | None:
    """
    Map a requested date onto an available one.

    ``available`` must be sorted most recent first. No request selects the most
    recent date; an unavailable date selects the closest earlier one, or the
    oldest available date when the request predates all data.
    """
    if not available:
        return None
    if requested is None:
        return available[0]
    for day in available:
        if day <= requested:
            return day
    return available[-1]


def value_on(points: Sequence[DataPoint], day: date | None) -> Decimal | None:
    if day is None:
        return None
    for point in points:
        if point.date == day:
            return point.value
    return None


def build_yield_curve(
    report: SeriesReport,
    primary: date | None = None,
    compare: date | None = None,
) -> YieldCurveResponse:
    """Build one curve point per maturity for the primary and comparison dates."""
    dates = available_dates(report)
    primary_date = resolve_curve_date(primary, dates)
    compare_date = resolve_curve_date(compare, dates) if compare is not None else None

    points = []
    for code, maturity in TREASURY_MATURITIES.items():
        series = report.aligned.chart_data.get(code, ())
        points.append(
            CurvePoint(
                maturity=maturity,
                code=code,
                curve1=value_on(series, primary_date),
                curve2=value_on(series, compare_date),
            )
        )

    return YieldCurveResponse(
        primary_date=primary_date,
        compare_date=compare_date,
        available_dates=dates,
        points=points,
    )


async def load_treasury_series(
    db: AsyncSession,
    cache: TTLCache,
    *,
    end_date: date,
    years: int | None = None,
    refresh: bool = False,
) -> SeriesReport:
    """
    Load treasury history ending at ``end_date``, reusing a cached result.

    ``refresh`` skips the cache lookup and replaces the entry.
    """
    if years is None:
        years = settings.curve_history_years
    start_date = years_before(end_date, years)
    key = f"treasury:{start_date.isoformat()}:{end_date.isoformat()}"

    if not refresh:
        cached = cache.get(key)
        if cached is not None:
            report, _ = cached
            return report

    report = await get_aligned_data(
        db, TREASURY_CODES, start_date, end_date, limit=settings.curve_row_limit
    )
    cache.put(key, report)
    logger.info(
        "Cached treasury series %s to %s (%d rows)", start_date, end_date, report.row_count
    )
    return report
