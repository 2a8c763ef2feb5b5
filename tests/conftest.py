import mongomock
import pytest
from bson import ObjectId

from app.auth.verify import current_user_id
from app.config import settings
from app.db.mongo import get_database
from app.services.auth_service import AuthService

TEST_USER_ID = "65f1c0ffee00000000000001"


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Deterministic secrets; no OpenAI key so generation uses templates."""
    monkeypatch.setattr(settings, "JWT_SECRET", "test-access-secret")
    monkeypatch.setattr(settings, "JWT_REFRESH_SECRET", "test-refresh-secret")
    monkeypatch.setattr(settings, "ENCRYPTION_KEY", "test-encryption-key")
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    monkeypatch.setattr(settings, "LINKEDIN_CLIENT_ID", "linkedin-client")
    monkeypatch.setattr(settings, "LINKEDIN_CLIENT_SECRET", "linkedin-secret")
    return settings


class AsyncCursor:
    def __init__(self, cursor):
        self._docs = iter(cursor)

    def __aiter__(self):
        return self

    async def __anext__(self):
        try:
            return next(self._docs)
        except StopIteration:
            raise StopAsyncIteration from None


class AsyncCollection:
    """Awaitable facade over a mongomock collection, shaped like pymongo's async API."""

    def __init__(self, collection):
        self.sync = collection

    async def insert_one(self, document, **kwargs):
        return self.sync.insert_one(document, **kwargs)

    async def find_one(self, *args, **kwargs):
        return self.sync.find_one(*args, **kwargs)

    def find(self, *args, **kwargs):
        return AsyncCursor(self.sync.find(*args, **kwargs))

    async def count_documents(self, *args, **kwargs):
        return self.sync.count_documents(*args, **kwargs)

    async def find_one_and_update(self, *args, **kwargs):
        return self.sync.find_one_and_update(*args, **kwargs)

    async def delete_one(self, *args, **kwargs):
        return self.sync.delete_one(*args, **kwargs)

    async def create_indexes(self, indexes):
        return self.sync.create_indexes(indexes)


class AsyncDatabase:
    def __init__(self, database):
        self.sync = database

    def __getitem__(self, name):
        return AsyncCollection(self.sync[name])


@pytest.fixture
def db():
    client = mongomock.MongoClient(tz_aware=True)
    return AsyncDatabase(client["jobsearch_test"])


@pytest.fixture
def make_user(db):
    """Register a user through the auth service; returns the AuthResponse."""

    async def _make(email="ana@example.com", password="s3cret-pass", name="Ana", timezone="UTC"):
        return await AuthService(db).register(email, password, name, timezone)

    return _make


class FakeRedis:
    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def set_with_ttl(self, key: str, value: str, ttl_s: int | None = None) -> bool:
        self.store[key] = value
        self.ttls[key] = ttl_s
        return True

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def delete(self, key: str) -> bool:
        return self.store.pop(key, None) is not None

    async def pop(self, key: str) -> str | None:
        self.ttls.pop(key, None)
        return self.store.pop(key, None)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def auth_override():
    def _override():
        return TEST_USER_ID

    return _override


@pytest.fixture
def apply_auth_override(auth_override):
    def _apply(app):
        app.dependency_overrides[current_user_id] = auth_override

    return _apply


@pytest.fixture
def apply_db_override(db):
    def _apply(app):
        app.dependency_overrides[get_database] = lambda: db

    return _apply


@pytest.fixture
def object_id():
    return lambda: str(ObjectId())
