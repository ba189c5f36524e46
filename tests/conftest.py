import os

# Point the app at a throwaway in-memory database before app.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://:memory:"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app.core.db import reset_db, close_db

TEST_DB_URL = "sqlite://:memory:"


@pytest_asyncio.fixture
async def seeded_db():
    """Fresh database holding the reference dataset, closed after the test."""
    await reset_db(TEST_DB_URL)
    yield
    await close_db()


@pytest.fixture
def client():
    from app.main import app
    return TestClient(app)
