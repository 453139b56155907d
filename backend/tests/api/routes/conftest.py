"""Fixtures for API route tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.storage.database import get_db
from app.main import create_app


@pytest.fixture
def app(test_settings, database, db_session, blob_store, identity_provider):
    """Create the application wired to the test database and blob store."""
    app = create_app(
        settings=test_settings,
        database=database,
        blob_store=blob_store,
        identity_provider=identity_provider,
    )

    async def get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = get_test_db

    return app


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def alice_headers(sample_user):
    return {"Authorization": f"Bearer token-{sample_user.id}"}


@pytest.fixture
def bob_headers(other_user):
    return {"Authorization": f"Bearer token-{other_user.id}"}
