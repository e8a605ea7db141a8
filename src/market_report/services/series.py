"""Series aggregation pipeline: query, alignment and summary derivation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from types import MappingProxyType

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from market_report.core.config import settings
from market_report.models.series import FinData, FinMaster
from market_report.schemas.series import DataPoint, SeriesObservation, SeriesSummary, TableRow

logger = logging.getLogger(__name__)


class QueryFailure(Exception):
    """The series store could not be read. No partial result is available."""


@dataclass(frozen=True)
class AlignedSeries:
    """Chart and table views built from the same raw rows."""

    codes: tuple[str, ...]
    chart_data: Mapping[str, tuple[DataPoint, ...]]
    table_data: tuple[TableRow, ...]
    descriptions: Mapping[str, str]


@dataclass(frozen=True)
class SeriesReport:
    """Aligned views plus per-series summaries for one request."""

    aligned: AlignedSeries
    summaries: Mapping[str, SeriesSummary]
    row_count: int
    truncated: bool


async def query_series(
    db: AsyncSession,
    codes: Sequence[str],
    start_date: date,
    end_date: date,
    limit: int | None = None,
) -> tuple[list[SeriesObservation], bool]:
    """
    Load observations for the given codes within [start_date, end_date].

    Rows are ordered by date, then code, and capped at ``limit`` (defaults to
    ``settings.series_row_limit``). An inverted range returns no rows. One row
    past the cap is read so the returned flag is True only when rows were
    actually dropped.

    Returns:
        The observations and whether the result was truncated.

    Raises:
        QueryFailure: the database could not be queried or returned a malformed row.
    """
    if limit is None:
        limit = settings.series_row_limit

    stmt = (
        select(
            FinData.code.label("code"),
            FinData.date.label("date"),
            FinData.value.label("value"),
            FinMaster.description.label("description"),
        )
        .outerjoin(FinMaster, FinMaster.code == FinData.code)
        .where(
            FinData.code.in_(list(codes)),
            FinData.date >= start_date,
            FinData.date <= end_date,
        )
        .order_by(FinData.date, FinData.code)
        .limit(limit + 1)
    )

    try:
        result = await db.execute(stmt)
        rows = result.all()
    except SQLAlchemyError as exc:
        logger.exception("Series query failed for codes %s", ",".join(codes))
        raise QueryFailure("Failed to load series data") from exc

    try:
        observations = [SeriesObservation.model_validate(row._asdict()) for row in rows]
    except ValidationError as exc:
        logger.exception("Series query returned a malformed row")
        raise QueryFailure("Failed to load series data") from exc

    truncated = len(observations) > limit
    if truncated:
        logger.warning(
            "Series query for %s exceeded the %d row cap; results are truncated",
            ",".join(codes),
            limit,
        )
        observations = observations[:limit]
    return observations, truncated


async def fetch_series(
    db: AsyncSession,
    codes: Sequence[str],
    start_date: date,
    end_date: date,
    limit: int | None = None,
) -> list[SeriesObservation]:
    """Load observations like ``query_series``, without the truncation flag."""
    observations, _ = await query_series(db, codes, start_date, end_date, limit=limit)
    return observations


def align(rows: Iterable[SeriesObservation], codes: Sequence[str]) -> AlignedSeries:
    """
    Merge raw observations into per-series chart sequences and a wide table.

    Every requested code gets a chart entry and a description, even without
    rows. Table rows cover the union of dates seen; missing cells are None.
    When the same (code, date) appears twice the later row wins in the table,
    while the chart keeps both points. Rows for codes not requested are ignored.
    """
    requested = tuple(codes)
    points: dict[str, list[DataPoint]] = {code: [] for code in requested}
    descriptions: dict[str, str] = {code: code for code in requested}
    described: set[str] = set()
    cells: dict[date, dict[str, Decimal | None]] = {}

    for row in rows:
        if row.code not in points:
            continue

        points[row.code].append(DataPoint(date=row.date, value=row.value))
        if row.code not in described:
            descriptions[row.code] = row.description or row.code
            described.add(row.code)

        cells.setdefault(row.date, {})[row.code] = row.value

    chart_data = {
        code: tuple(sorted(series, key=lambda p: p.date)) for code, series in points.items()
    }
    table_data = tuple(
        TableRow(date=day, values={code: cells[day].get(code) for code in requested})
        for day in sorted(cells)
    )

    return AlignedSeries(
        codes=requested,
        chart_data=MappingProxyType(chart_data),
        table_data=table_data,
        descriptions=MappingProxyType(descriptions),
    )


def summarize(points: Sequence[DataPoint]) -> SeriesSummary:
    """
    Derive the latest value, its date and the change since the earliest value.

    Null points are ignored. With fewer than two observed points the change is
    None. Among points sharing the latest date the last one wins; among points
    sharing the earliest date the first one wins.
    """
    observed = sorted((p for p in points if p.value is not None), key=lambda p: p.date)
    if not observed:
        return SeriesSummary()

    latest = observed[-1]
    change = None
    if len(observed) >= 2:
        change = latest.value - observed[0].value

    return SeriesSummary(latest_value=latest.value, latest_date=latest.date, change=change)


async def get_aligned_data(
    db: AsyncSession,
    codes: Sequence[str],
    start_date: date,
    end_date: date,
    limit: int | None = None,
) -> SeriesReport:
    """Run query, alignment and derivation for one request."""
    rows, truncated = await query_series(db, codes, start_date, end_date, limit=limit)
    aligned = align(rows, codes)
    summaries = {code: summarize(aligned.chart_data[code]) for code in aligned.codes}

    return SeriesReport(
        aligned=aligned,
        summaries=MappingProxyType(summaries),
        row_count=len(rows),
        truncated=truncated,
    )
