import pytest
from fastapi.testclient import TestClient

from chat_backend.app.db.database import SessionLocal, create_db_engine, init_db
from chat_backend.app.main import create_app
from chat_backend.app.repositories import (
    InMemoryChatRepository,
    InMemoryMessageRepository,
    InMemoryStore,
    SqlChatRepository,
    SqlMessageRepository,
)
from chat_backend.app.services.chat_service import ChatService


@pytest.fixture()
def store():
    return InMemoryStore()


@pytest.fixture()
def chat_repo(store):
    return InMemoryChatRepository(store)


@pytest.fixture()
def message_repo(store):
    return InMemoryMessageRepository(store)


@pytest.fixture()
def service(chat_repo, message_repo):
    return ChatService(chat_repo, message_repo)


@pytest.fixture()
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = SessionLocal(bind=engine)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def sql_chat_repo(db):
    return SqlChatRepository(db)


@pytest.fixture()
def sql_message_repo(db):
    return SqlMessageRepository(db)


@pytest.fixture()
def client():
    """A test client backed by a fresh in-memory SQLite database."""
    app = create_app(database_url="sqlite://")
    with TestClient(app) as test_client:
        yield test_client
