"""Sample rows for inspecting the report tables."""

import logging
from typing import Any

from sqlalchemy import MetaData, Table, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from market_report.models.series import FinData
from market_report.services.series import QueryFailure

logger = logging.getLogger(__name__)

SAMPLE_SERIES_LIMIT = 10
SAMPLE_POINTS_LIMIT = 50
WEEKLY_SUMMARY_TABLE = "AIWeeklySummary"


async def get_latest_points(
    db: AsyncSession, code: str, limit: int = SAMPLE_POINTS_LIMIT
) -> list[FinData]:
    """Get the most recent observations of one series, newest first."""
    stmt = (
        select(FinData)
        .where(FinData.code == code)
        .order_by(FinData.date.desc())
        .limit(limit)
    )
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as exc:
        logger.exception("Sample query failed for code %s", code)
        raise QueryFailure("Failed to load sample data") from exc
    return list(result.scalars().all())


async def get_latest_weekly_summary(db: AsyncSession) -> dict[str, Any] | None:
    """
    Get the weekly summary row with the latest END_DATE, or None when empty.

    The table is written by the summary job and not owned by this backend,
    so its columns are reflected and returned as stored.

    Raises:
        QueryFailure: the table is missing or could not be read.
    """
    try:
        table = await db.run_sync(
            lambda session: Table(
                WEEKLY_SUMMARY_TABLE, MetaData(), autoload_with=session.connection()
            )
        )
        if "END_DATE" not in table.c:
            raise QueryFailure(f"{WEEKLY_SUMMARY_TABLE} has no END_DATE column")
        result = await db.execute(
            select(table).order_by(table.c.END_DATE.desc()).limit(1)
        )
        row = result.first()
    except SQLAlchemyError as exc:
        logger.exception("Weekly summary query failed")
        raise QueryFailure("Failed to load weekly summary") from exc

    if row is None:
        return None
    return dict(row._mapping)
