"""Shared fixtures: a throwaway SQLite database rebuilt for every test."""

import os
import tempfile

# Must be set before config/storage are imported
_DB_DIR = tempfile.mkdtemp(prefix="translations-test-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.pop("API_TOKEN", None)

import pytest
from httpx import ASGITransport, AsyncClient

from config import settings
from main import app
from storage import async_session_factory, drop_db, init_db
from storage.repositories import TagRepository, TranslationRepository, TranslationTagRepository


@pytest.fixture(autouse=True)
async def reset_database():
    await drop_db()
    await init_db()
    yield


@pytest.fixture(autouse=True)
def no_api_token(monkeypatch):
    monkeypatch.setattr(settings, "API_TOKEN", None)


@pytest.fixture
async def session():
    async with async_session_factory() as db_session:
        yield db_session
        await db_session.rollback()


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def repos(session):
    return (
        TranslationRepository(session),
        TagRepository(session),
        TranslationTagRepository(session),
    )
