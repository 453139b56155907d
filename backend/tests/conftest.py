"""Shared test fixtures."""

import uuid
from datetime import datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.errors import AuthInvalidError
from app.core.security.hashing import compute_content_hash
from app.core.security.identity import IdentityProvider, VerifiedIdentity
from app.core.storage.blob_store import BlobNotFoundError, BlobStore, StoredBlob
from app.core.storage.database import Database
from app.models.database import File, User, UserSettings


class InMemoryBlobStore(BlobStore):
    """Blob store test double keeping blobs in a dict and counting calls."""

    provider = "memory"

    def __init__(self):
        self.blobs: dict[str, bytes] = {}
        self.put_calls = 0
        self.get_calls = 0
        self.deleted: list[str] = []

    async def put(self, owner_id, filename, data, mime_type=None):
        self.put_calls += 1
        path = f"{owner_id}/{uuid.uuid4().hex}/{filename}"
        self.blobs[path] = data
        return StoredBlob(path=path, provider=self.provider)

    async def get(self, path):
        self.get_calls += 1
        if path not in self.blobs:
            raise BlobNotFoundError()
        return self.blobs[path]

    async def delete(self, path):
        self.deleted.append(path)
        self.blobs.pop(path, None)

    async def sign(self, path, ttl_seconds):
        return f"https://blobs.test/{path}?ttl={ttl_seconds}"

    async def exists(self, path):
        return path in self.blobs


class FakeIdentityProvider(IdentityProvider):
    """Accepts credentials of the form ``token-<user_id>``."""

    async def verify(self, credential):
        if not credential.startswith("token-"):
            raise AuthInvalidError("Invalid token")
        user_id = credential[len("token-"):]
        return VerifiedIdentity(user_id=user_id, email=f"{user_id}@example.com")


class FrozenClock:
    """Controllable replacement for ``datetime.utcnow``."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime.utcnow()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated from the environment's .env file."""
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        storage_provider="local",
        local_storage_path=str(tmp_path / "uploads"),
        public_api_url="http://api.test/api/v1",
        frontend_url="http://frontend.test",
        signing_secret="test-signing-secret",
        max_upload_size_bytes=1024 * 1024,
        default_storage_limit_bytes=10 * 1024 * 1024,
        rate_limit_enabled=False,
    )


@pytest.fixture
async def database():
    """In-memory database with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    db = Database("sqlite+aiosqlite:///:memory:", engine=engine)
    await db.init_db()
    yield db
    await db.close_db()


@pytest.fixture
async def db_session(database):
    """Database session for a test."""
    async with database.session() as session:
        yield session


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def clock():
    return FrozenClock()


async def create_user(db_session, user_id: str, username: str | None = None) -> User:
    user = User(id=user_id, email=f"{user_id}@example.com", username=username)
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def create_file(
    db_session,
    owner: User,
    content: bytes = b"hello world",
    filename: str = "hello.txt",
    **fields,
) -> File:
    """Insert a file record directly, bypassing the upload path."""
    file = File(
        owner_id=owner.id,
        filename=filename,
        storage_path=f"{owner.id}/{filename}",
        storage_provider="memory",
        mime_type="text/plain",
        size_bytes=len(content),
        content_hash=compute_content_hash(content),
        **fields,
    )
    db_session.add(file)
    await db_session.commit()
    await db_session.refresh(file)
    return file


@pytest.fixture
async def sample_user(db_session):
    """Create a sample user."""
    return await create_user(db_session, "user-1", username="alice")


@pytest.fixture
async def other_user(db_session):
    """Create a second user."""
    return await create_user(db_session, "user-2", username="bob")


@pytest.fixture
async def sample_file(db_session, sample_user, blob_store):
    """Private file owned by ``sample_user`` whose bytes live in ``blob_store``."""
    file = await create_file(db_session, sample_user, content=b"sample content")
    blob_store.blobs[file.storage_path] = b"sample content"
    return file


@pytest.fixture
async def small_quota_user(db_session):
    """User whose storage limit is 100 bytes."""
    user = await create_user(db_session, "user-small", username="carol")
    db_session.add(UserSettings(owner_id=user.id, storage_limit_bytes=100, preferences={}))
    await db_session.commit()
    return user


@pytest.fixture
def make_user(db_session):
    """Factory fixture creating users."""

    async def _make_user(user_id: str, username: str | None = None) -> User:
        return await create_user(db_session, user_id, username=username)

    return _make_user


@pytest.fixture
def make_file(db_session, blob_store):
    """Factory fixture creating file records whose bytes live in ``blob_store``."""

    async def _make_file(owner: User, content: bytes = b"hello world", **fields) -> File:
        fields.setdefault("filename", f"file-{uuid.uuid4().hex[:8]}.txt")
        file = await create_file(db_session, owner, content=content, **fields)
        blob_store.blobs[file.storage_path] = content
        return file

    return _make_file
