import os

# Must be set before anything imports core.config
os.environ["ENV"] = "testing"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("LOG_DIR", "logs")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from main import app
from core.database import Base
from schemas.auth_schemas import UserCreate
from storage import DatabaseStorage, MemoryStorage, get_storage
from utils.hashing import hash_password
from tests.factories import TEST_PASSWORD, make_checkout_payload

# SYNC SQLite for testing (matches the sync storage layer)
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False}
)


@event.listens_for(engine, "connect")
def enforce_foreign_keys(dbapi_connection, connection_record):
    # SQLite skips foreign key checks unless asked, unlike Postgres
    dbapi_connection.execute("PRAGMA foreign_keys=ON")


TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)



@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Creates a fresh, empty database for each test and drops it afterwards.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_storage(session) -> DatabaseStorage:
    """Relational store on the test database, catalog seeded."""
    storage = DatabaseStorage(engine)
    storage.bootstrap()
    return storage


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """
    Every test using this fixture runs once per backend: both stores must
    behave the same.
    """
    if request.param == "memory":
        return request.getfixturevalue("memory_storage")
    return request.getfixturevalue("db_storage")


@pytest.fixture(params=["memory", "database"])
def empty_storage(request):
    """A store of each kind with no catalog."""
    if request.param == "memory":
        return MemoryStorage(seed=False)
    request.getfixturevalue("session")
    return DatabaseStorage(engine)


@pytest.fixture
async def client(storage):
    """
    Yields an HTTP client talking to the app, with the storage dependency
    pointed at the test store.
    """
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def registered_user(storage):
    return storage.create_user(UserCreate(
        username="shopper",
        hashed_password=hash_password(TEST_PASSWORD)
    ))


@pytest.fixture
def checkout_payload() -> dict:
    return make_checkout_payload()
