"""Pytest configuration and fixtures for backend tests."""

from collections.abc import AsyncGenerator
from datetime import date, datetime
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from market_report.core.config import settings
from market_report.models import Base
from market_report.models.ai_analysis import Folder, PdfAnalysis
from market_report.models.series import FinData, FinMaster

# Test database URL - use SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# AIWeeklySummary is not mapped by the models; tests create it directly
WEEKLY_SUMMARY_DDL = (
    "CREATE TABLE AIWeeklySummary "
    "(ID INTEGER PRIMARY KEY, START_DATE DATE, END_DATE DATE, SUMMARY TEXT)"
)


@pytest.fixture
async def engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
    )

    # Enable foreign keys for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(engine, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client with dependency overrides."""
    from market_report.core.database import get_db
    from market_report.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.state.curve_cache.clear()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
    app.state.curve_cache.clear()


@pytest.fixture
def admin_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable admin-only endpoints for the duration of a test."""
    monkeypatch.setattr(settings, "admin_mode", True)


@pytest.fixture
def viewer_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable admin-only endpoints for the duration of a test."""
    monkeypatch.setattr(settings, "admin_mode", False)


class BrokenSession:
    """Stand-in session for a database that refuses connections."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def run_sync(self, fn, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def rollback(self):
        pass


async def broken_db():
    """Dependency override yielding a BrokenSession."""
    yield BrokenSession()


# ============================================================================
# Factory Functions
# ============================================================================


class SeriesFactory:
    """Factory for creating series master rows and observations."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def create(
        self,
        code: str,
        observations: list[tuple[str, float | None]] | None = None,
        description: str | None = None,
        source: str | None = "FRED",
        with_master: bool = True,
    ) -> FinMaster | None:
        """Create a series with (ISO date, value) observations."""
        master = None
        if with_master:
            master = FinMaster(code=code, description=description, source=source)
            self.db_session.add(master)

        for day, value in observations or []:
            self.db_session.add(
                FinData(
                    code=code,
                    date=date.fromisoformat(day),
                    value=Decimal(str(value)) if value is not None else None,
                )
            )

        await self.db_session.commit()
        return master


class AnalysisFactory:
    """Factory for creating analysis folders and entries."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def create_folder(self, name: str) -> Folder:
        folder = Folder(name=name)
        self.db_session.add(folder)
        await self.db_session.commit()
        await self.db_session.refresh(folder)
        return folder

    async def create(
        self,
        folder: Folder | None = None,
        end_date: str | None = None,
        created_at: datetime | None = None,
        **text_fields: str | None,
    ) -> PdfAnalysis:
        """Create an analysis entry."""
        analysis = PdfAnalysis(
            folder_id=folder.id if folder else None,
            end_date=date.fromisoformat(end_date) if end_date else None,
            created_at=created_at,
            **text_fields,
        )
        self.db_session.add(analysis)
        await self.db_session.commit()
        await self.db_session.refresh(analysis)
        return analysis


@pytest.fixture
def series_factory(db_session: AsyncSession) -> SeriesFactory:
    """Factory fixture for creating test series."""
    return SeriesFactory(db_session)


@pytest.fixture
def analysis_factory(db_session: AsyncSession) -> AnalysisFactory:
    """Factory fixture for creating test analyses."""
    return AnalysisFactory(db_session)
