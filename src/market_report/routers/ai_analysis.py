"""AI analysis endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from market_report.core.deps import DbSession
from market_report.schemas.ai_analysis import (
    AnalysisDetailResponse,
    AnalysisFolderListResponse,
    AnalysisListResponse,
)
from market_report.services import ai_analysis as analysis_service

router = APIRouter(prefix="/api/report/ai-analysis", tags=["ai-analysis"])


@router.get("/folders", response_model=AnalysisFolderListResponse)
async def list_analysis_folders(db: DbSession) -> AnalysisFolderListResponse:
    """List folders that contain analyses."""
    folders = await analysis_service.get_analysis_folders(db)
    return AnalysisFolderListResponse(count=len(folders), folders=folders)


@router.get("/list", response_model=AnalysisListResponse)
async def list_analyses(
    db: DbSession,
    folder_id: int | None = Query(None, alias="folderId", ge=1),
) -> AnalysisListResponse:
    """List the most recent analyses, newest first."""
    entries = await analysis_service.get_recent_analyses(db, folder_id=folder_id)
    return AnalysisListResponse(count=len(entries), entries=entries)


@router.get("/{analysis_id}", response_model=AnalysisDetailResponse)
async def get_analysis(analysis_id: int, db: DbSession) -> AnalysisDetailResponse:
    """Get the full text of one analysis."""
    analysis = await analysis_service.get_analysis_by_id(db, analysis_id)
    if analysis is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Analysis not found",
        )

    return AnalysisDetailResponse(
        id=analysis.id,
        macro_us=analysis.macro_us or "",
        equities=analysis.equities or "",
        fixed_income=analysis.fixed_income or "",
        other_assets=analysis.other_assets or "",
        start_date=analysis.start_date,
        end_date=analysis.end_date,
        created_at=analysis.created_at,
    )
