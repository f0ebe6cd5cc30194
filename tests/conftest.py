"""Shared fixtures: HTML pages, fake Playwright pages, SQLite-backed API client."""

import os
import sqlite3
import uuid

# Register UUID adapter for SQLite
sqlite3.register_adapter(uuid.UUID, lambda u: str(u))

# Point the app at SQLite before app.core.database builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.database import Base, get_db, session_scope

# Ensure all models are imported so metadata is populated
import app.models  # noqa: F401

from app.api.dependencies import get_scraper
from portfolio_scraper import PortfolioScraper, extract_portfolio

# Override PostgreSQL-specific column types for SQLite compatibility
for table in Base.metadata.tables.values():
    for column in table.columns:
        if isinstance(column.type, JSONB):
            column.type = JSON()
        if isinstance(column.type, PG_UUID):
            column.type = String(36)


ABOUT_PARAGRAPH = (
    "I build accessible web applications and care deeply about performance and design."
)

JANE_DOE_HTML = f"""
<html>
<head><title>Jane Doe - Portfolio</title></head>
<body>
  <section id="about">
    <h2>About</h2>
    <p>{ABOUT_PARAGRAPH}</p>
  </section>
  <div class="project-card"><h3>Weather App</h3><p>Forecasts built with React.</p></div>
  <div class="project-card"><h3>Budget Tracker</h3><p>Personal finance dashboard.</p></div>
  <div class="project-card"><h3>Chat Server</h3><p>Realtime messaging backend.</p></div>
  <a href="mailto:jane@x.com">Email me</a>
</body>
</html>
"""


@pytest.fixture
def jane_doe_html() -> str:
    return JANE_DOE_HTML


@pytest.fixture
def jane_doe_result():
    return extract_portfolio(JANE_DOE_HTML, "https://janedoe.dev")


# ---- Fake Playwright objects ----

def make_response(status: int = 200) -> MagicMock:
    response = MagicMock()
    response.status = status
    return response


def make_page(html: str = "", goto=None, design=None) -> MagicMock:
    """A stand-in for playwright Page with the async methods the scraper calls."""
    page = MagicMock()
    if goto is None:
        goto = AsyncMock(return_value=make_response(200))
    page.goto = goto
    page.content = AsyncMock(return_value=html)
    page.evaluate = AsyncMock(return_value=design or {
        "background_color": "rgb(255, 255, 255)",
        "text_color": "rgb(0, 0, 0)",
        "has_navbar": True,
        "has_footer": False,
        "is_dark_mode": False,
    })
    page.close = AsyncMock()
    return page


class FakeBrowser:
    """Hands out a single fake page and counts scoped releases."""

    def __init__(self, page):
        self._page = page
        self.acquired = 0
        self.released = 0

    @asynccontextmanager
    async def page(self):
        self.acquired += 1
        try:
            yield self._page
        finally:
            self.released += 1

    async def shutdown(self):
        pass


@pytest.fixture
def page_factory():
    return make_page


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def browser_factory():
    return FakeBrowser


# ---- API fixtures ----

@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """File-backed SQLite per test, tables created up front."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def fake_scraper():
    """PortfolioScraper double whose scrape() is an AsyncMock."""
    scraper = MagicMock(spec=PortfolioScraper)
    scraper.scrape = AsyncMock()
    return scraper


@pytest_asyncio.fixture
async def async_client(session_factory, fake_scraper):
    """Async HTTPX client with DB and scraper overrides."""
    from app.main import app

    async def _override_get_db():
        async with session_scope(session_factory) as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_scraper] = lambda: fake_scraper
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
