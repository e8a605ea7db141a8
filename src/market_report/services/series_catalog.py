"""Service for listing available series."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from market_report.models.series import FinMaster


async def get_all_series(db: AsyncSession, limit: int | None = None) -> list[FinMaster]:
    """Get series in the master table ordered by code, optionally only the first ``limit``."""
    stmt = select(FinMaster).order_by(FinMaster.code)
    if limit is not None:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())
