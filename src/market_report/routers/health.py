"""Database health and explorer endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from market_report.core.config import settings
from market_report.core.deps import AdminAccess, DbSession
from market_report.schemas.health import (
    ConnectionConfigResponse,
    DatabaseHealthResponse,
    DatabaseInfoResponse,
    SchemaHealthResponse,
    TableColumnsResponse,
)
from market_report.services import health as health_service

router = APIRouter(prefix="/api/health", tags=["health"])


def database_error(error: str) -> JSONResponse:
    """500 response with the same body as a failed connectivity check."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=DatabaseHealthResponse(ok=False, error=error).model_dump(),
    )


@router.get("/db", response_model=DatabaseHealthResponse)
async def database_health(db: DbSession) -> DatabaseHealthResponse | JSONResponse:
    """Check that the database answers a trivial query."""
    error = await health_service.check_database(db)
    if error is not None:
        return database_error(error)
    return DatabaseHealthResponse(ok=True)


@router.get("/schema", response_model=SchemaHealthResponse)
async def schema_health(db: DbSession) -> SchemaHealthResponse | JSONResponse:
    """Report which of the report tables exist."""
    try:
        tables = await health_service.check_schema(db)
    except health_service.HealthCheckFailed as exc:
        return database_error(str(exc))
    return SchemaHealthResponse(
        tables=tables,
        found=sum(tables.values()),
        expected=len(tables),
    )


@router.get("/columns", response_model=TableColumnsResponse)
async def table_columns(db: DbSession) -> TableColumnsResponse | JSONResponse:
    """List the columns of the series and weekly summary tables."""
    try:
        tables = await health_service.get_table_columns(db)
    except health_service.HealthCheckFailed as exc:
        return database_error(str(exc))
    return TableColumnsResponse.model_validate({"tables": tables})


@router.get("/db-info", response_model=DatabaseInfoResponse)
async def database_info(db: DbSession) -> DatabaseInfoResponse | JSONResponse:
    """Show which database and login the backend is connected as."""
    try:
        info = await health_service.get_database_info(db)
    except health_service.HealthCheckFailed as exc:
        return database_error(str(exc))
    return DatabaseInfoResponse(**info)


@router.get("/config", response_model=ConnectionConfigResponse)
async def connection_config(admin: AdminAccess) -> ConnectionConfigResponse:
    """Show the configured connection with the password redacted. Admin only."""
    return ConnectionConfigResponse(**health_service.redact_database_url(settings.database_url))
