"""Database health checks and connection diagnostics."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import Connection, inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ["FinMaster", "FinData", "Folders", "PdfAnalysis", "AIWeeklySummary"]

# Tables whose columns the explorer lists
EXPLORED_TABLES = ["FinMaster", "FinData", "AIWeeklySummary"]


class HealthCheckFailed(Exception):
    """A diagnostic query could not run against the database."""


async def check_database(db: AsyncSession) -> str | None:
    """Run a trivial query. Returns None when healthy, else the error message."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning(f"Database health check failed: {e}")
        return str(e)
    return None


async def _run_on_connection(
    db: AsyncSession, check: str, fn: Callable[[Connection], Any]
) -> Any:
    try:
        return await db.run_sync(lambda session: fn(session.connection()))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning(f"{check} failed: {e}")
        raise HealthCheckFailed(str(e)) from e


async def check_schema(db: AsyncSession) -> dict[str, bool]:
    """
    Report which of the required tables exist.

    Raises:
        HealthCheckFailed: the database could not be inspected.
    """
    existing = set(
        await _run_on_connection(
            db, "Schema check", lambda conn: inspect(conn).get_table_names()
        )
    )
    return {table: table in existing for table in REQUIRED_TABLES}


def _describe_columns(conn: Connection) -> dict[str, list[dict[str, str]]]:
    inspector = inspect(conn)
    existing = set(inspector.get_table_names())
    return {
        table: [
            {"name": column["name"], "type": str(column["type"])}
            for column in inspector.get_columns(table)
        ]
        for table in EXPLORED_TABLES
        if table in existing
    }


async def get_table_columns(db: AsyncSession) -> dict[str, list[dict[str, str]]]:
    """
    List name and type of each column of the explored tables.

    Tables missing from the database are left out.

    Raises:
        HealthCheckFailed: the database could not be inspected.
    """
    return await _run_on_connection(db, "Column listing", _describe_columns)


def _describe_connection(conn: Connection) -> dict[str, str | None]:
    url = conn.engine.url
    version = conn.dialect.server_version_info
    return {
        "database_name": url.database,
        "login_name": url.username,
        "dialect": conn.dialect.name,
        "server_version": ".".join(str(part) for part in version) if version else None,
    }


async def get_database_info(db: AsyncSession) -> dict[str, str | None]:
    """
    Describe the live connection: database, login, dialect and server version.

    Raises:
        HealthCheckFailed: no connection could be opened.
    """
    return await _run_on_connection(db, "Database info", _describe_connection)


def redact_database_url(database_url: str) -> dict[str, Any]:
    """Summarize a connection URL without exposing the password."""
    url = make_url(database_url)
    host = url.host
    if host and len(host) > 10:
        host = f"{host[:10]}..."
    return {
        "driver": url.drivername,
        "host": host,
        "port": url.port,
        "database": url.database,
        "user": url.username,
        "has_password": bool(url.password),
    }
