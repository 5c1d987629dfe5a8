"""
Catalogue API - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── database:        in-memory SQLite Database with the schema created
    ├── reports_dir:     temporary directory for generated reports
    ├── app:             application built around `database` and `reports_dir`
    └── test_client:     HTTPX AsyncClient talking to `app` over ASGI
"""

import os
import tempfile

# Override settings BEFORE any catalogue import: the module-level app in
# catalogue_api.main is built from these values.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REPORTS_DIR"] = tempfile.mkdtemp(prefix="catalogue_reports_")
os.environ["STATIC_DIR"] = os.path.join(os.environ["REPORTS_DIR"], "no-static")
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from catalogue_api.config import Settings
from catalogue_api.database import Database
from catalogue_api.main import create_app
from catalogue_api.services.pdf_exporter import PdfReportExporter
from catalogue_api.services.report_service import ReportService


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.get.return_value = category
            result = await category_service.update_category(mock_db_session, 1, "x")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalar = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_category_data():
    return {"id": 1, "nom": "Fruits"}


@pytest.fixture
def sample_product_data():
    return {"id": 10, "nom": "Pomme", "prix": 1.5, "categorie_id": 1}


@pytest_asyncio.fixture
async def database():
    """
    In-memory SQLite store with both tables created.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def reports_dir(tmp_path):
    path = tmp_path / "reports"
    path.mkdir()
    return path


@pytest.fixture
def app(database, reports_dir, tmp_path):
    app_settings = Settings(
        database_url="sqlite+aiosqlite://",
        reports_dir=str(reports_dir),
        static_dir=str(tmp_path / "no-static"),
        log_level="WARNING",
    )
    return create_app(
        app_settings=app_settings,
        database=database,
        report_service=ReportService(
            exporter=PdfReportExporter(title=app_settings.report_title),
            reports_dir=str(reports_dir),
        ),
    )


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
