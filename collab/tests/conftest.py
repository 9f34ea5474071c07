# collab/tests/conftest.py
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from fakeredis import aioredis
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from collab.config import AppConfig
from collab.domain import schemas
from collab.infrastructure.database import create_database
from collab.infrastructure.event_dispatcher import EventDispatcher
from collab.infrastructure.session import SessionProvider
from collab.main import Application

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


def build_room(room_id: int, name: str | None = None, offset: int = 0):
    return schemas.ChatRoom(
        id=room_id,
        name=name or f"Room {room_id}",
        description=None,
        created_by="user-1",
        created_at=BASE_TIME + timedelta(seconds=offset or room_id),
    )


def build_message(message_id: int, room_id: int, content: str | None = None):
    return schemas.ChatMessage(
        id=message_id,
        room_id=room_id,
        user_id="user-1",
        content=content or f"Message {message_id}",
        created_at=BASE_TIME + timedelta(seconds=message_id),
    )


def build_file(file_id: int, room_id: int, name: str | None = None):
    name = name or f"file-{file_id}.txt"
    return schemas.SharedFile(
        id=file_id,
        room_id=room_id,
        user_id="user-1",
        name=name,
        description=None,
        url=f"https://example.com/files/{name}",
        size_bytes=10,
        mime_type="text/plain",
        created_at=BASE_TIME + timedelta(seconds=file_id),
    )


def build_task(
    task_id: int,
    status: schemas.TaskStatus = schemas.TaskStatus.TODO,
    due_date: datetime | None = None,
    priority: schemas.TaskPriority = schemas.TaskPriority.MEDIUM,
    assigned_to: str | None = None,
):
    return schemas.Task(
        id=task_id,
        title=f"Task {task_id}",
        description=None,
        priority=priority,
        status=status,
        due_date=due_date,
        assigned_to=assigned_to,
        created_by="user-1",
        created_at=BASE_TIME + timedelta(seconds=task_id),
    )


@pytest.fixture
def make_room():
    return build_room


@pytest.fixture
def make_message():
    return build_message


@pytest.fixture
def make_file():
    return build_file


@pytest.fixture
def make_task():
    return build_task


@pytest.fixture(scope="function")
def app_config():
    """
    Provide a test configuration backed by an in-memory SQLite database.
    """
    return AppConfig(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        REDIS_HOST="localhost",
        REDIS_PORT=6379,
        REALTIME_CHANNEL_PREFIX="realtime",
        REALTIME_POLL_TIMEOUT=0.05,
        PROJECT_NAME="Test Collab Sync",
    )


@pytest.fixture(scope="function")
async def mock_redis():
    """Provide a fake Redis client for testing."""
    redis = aioredis.FakeRedis(decode_responses=True)
    yield redis
    await redis.flushall()
    await redis.aclose()


@pytest.fixture(scope="function")
async def engine(app_config):
    """Create a SQLAlchemy engine for testing with in-memory SQLite."""
    engine = create_async_engine(
        app_config.DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # Reuse the same connection
        echo=False,
    )
    await create_database(engine).create_tables()
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
def database(engine):
    return create_database(engine)


@pytest.fixture(scope="function")
def event_dispatcher():
    return EventDispatcher()


@pytest.fixture
def identity():
    return schemas.Identity(id="user-1", email="user1@example.com")


@pytest.fixture
def other_identity():
    return schemas.Identity(id="user-2", email="user2@example.com")


@pytest.fixture
def session_provider(identity):
    return SessionProvider(identity)


@pytest.fixture
def mock_subscription():
    subscription = Mock()
    subscription.unsubscribe = AsyncMock()
    return subscription


@pytest.fixture
def mock_realtime(mock_subscription):
    """A realtime channel double that records the registered handler."""
    realtime = Mock()
    realtime.handlers = {}

    async def subscribe(table, handler):
        realtime.handlers[table] = handler
        return mock_subscription

    realtime.subscribe = AsyncMock(side_effect=subscribe)
    return realtime


@pytest.fixture(scope="function")
async def application(app_config, mock_redis, engine):
    """Application wired to the test database and fake Redis."""
    application = Application(config=app_config)
    application.database = create_database(engine)
    application.redis_client.client = mock_redis
    yield application
    await application.database.disconnect()
