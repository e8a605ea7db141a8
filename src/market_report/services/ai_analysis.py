"""Service layer for AI-generated weekly analyses."""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from market_report.models.ai_analysis import Folder, PdfAnalysis
from market_report.schemas.ai_analysis import AnalysisFolder, AnalysisListItem

# The week picker shows half a year of reports
ANALYSIS_LIST_LIMIT = 26


def analysis_label(
    analysis_id: int, label_date: date | None, folder_name: str | None = None
) -> str:
    """Human-readable label, e.g. "Weekly - Week of Jan 5, 2024"."""
    if label_date is not None:
        label = f"Week of {label_date:%b} {label_date.day}, {label_date.year}"
    else:
        label = f"Analysis #{analysis_id}"
    if folder_name:
        label = f"{folder_name} - {label}"
    return label


async def get_analysis_folders(db: AsyncSession) -> list[AnalysisFolder]:
    """Get folders that contain at least one analysis, ordered by name."""
    query = (
        select(Folder.id, Folder.name, func.count(PdfAnalysis.id).label("analysis_count"))
        .join(PdfAnalysis, PdfAnalysis.folder_id == Folder.id)
        .group_by(Folder.id, Folder.name)
        .order_by(Folder.name)
    )
    result = await db.execute(query)
    return [
        AnalysisFolder(id=row.id, name=row.name, count=row.analysis_count)
        for row in result.all()
    ]


async def get_recent_analyses(
    db: AsyncSession, folder_id: int | None = None, limit: int = ANALYSIS_LIST_LIMIT
) -> list[AnalysisListItem]:
    """
    Get the most recent analyses, optionally within one folder.

    Entries are ordered by end date, falling back to the creation date, newest
    first; entries with neither come last.
    """
    label_date = func.coalesce(PdfAnalysis.end_date, func.date(PdfAnalysis.created_at))
    query = (
        select(PdfAnalysis, Folder.name.label("folder_name"))
        .outerjoin(Folder, PdfAnalysis.folder_id == Folder.id)
        .order_by(label_date.desc(), PdfAnalysis.id.desc())
        .limit(limit)
    )
    if folder_id is not None:
        query = query.where(PdfAnalysis.folder_id == folder_id)

    result = await db.execute(query)

    entries = []
    for analysis, folder_name in result.all():
        if analysis.end_date is not None:
            day = analysis.end_date
        elif analysis.created_at is not None:
            day = analysis.created_at.date()
        else:
            day = None
        entries.append(
            AnalysisListItem(
                id=analysis.id,
                label=analysis_label(analysis.id, day, folder_name),
                folder_id=analysis.folder_id,
                folder_name=folder_name,
                start_date=analysis.start_date,
                end_date=analysis.end_date,
                created_at=analysis.created_at,
            )
        )
    return entries


async def get_analysis_by_id(db: AsyncSession, analysis_id: int) -> PdfAnalysis | None:
    """Get a single analysis by its ID."""
    result = await db.execute(select(PdfAnalysis).where(PdfAnalysis.id == analysis_id))
    return result.scalar_one_or_none()
