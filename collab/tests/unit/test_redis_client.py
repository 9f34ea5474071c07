# collab/tests/unit/test_redis_client.py
import logging
from unittest.mock import AsyncMock, Mock, patch

import pytest
import redis

from collab.infrastructure.redis_client import RedisClient


@pytest.fixture
def test_logger():
    logger = logging.getLogger("test_redis")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def redis_client(test_logger):
    return RedisClient(host="localhost", port=6379, logger=test_logger)


@pytest.mark.asyncio
async def test_redis_connect_and_publish(redis_client, caplog):
    caplog.set_level(logging.DEBUG)
    with patch("redis.asyncio.Redis", return_value=AsyncMock()) as mock_redis:
        mock_redis.return_value.ping.return_value = True
        await redis_client.connect()
        assert redis_client.client is not None
        assert (
            f"Successfully connected to Redis at {redis_client.host}:{redis_client.port}"
            in caplog.text
        )

        await redis_client.publish("realtime:chat_messages", "payload")
        redis_client.client.publish.assert_called_once_with(
            "realtime:chat_messages", "payload"
        )
        assert "Published message to channel realtime:chat_messages" in caplog.text


@pytest.mark.asyncio
async def test_redis_connect_fail(redis_client, caplog):
    caplog.set_level(logging.ERROR)
    with patch("redis.asyncio.Redis", return_value=AsyncMock()) as mock_redis:
        mock_redis.return_value.ping.side_effect = redis.ConnectionError(
            "Connection failed"
        )
        with pytest.raises(redis.ConnectionError):
            await redis_client.connect()
        assert "Failed to connect to Redis: Connection failed" in caplog.text
        assert (
            f"Redis host: {redis_client.host}, Redis port: {redis_client.port}"
            in caplog.text
        )


@pytest.mark.asyncio
async def test_redis_disconnect(redis_client, caplog):
    caplog.set_level(logging.INFO)
    client = AsyncMock()
    redis_client.client = client
    await redis_client.disconnect()
    client.aclose.assert_called_once()
    assert not redis_client.is_connected
    assert "Disconnected from Redis" in caplog.text


@pytest.mark.asyncio
async def test_disconnect_without_connection_is_noop(redis_client, caplog):
    caplog.set_level(logging.INFO)
    await redis_client.disconnect()
    assert "Disconnected from Redis" not in caplog.text


@pytest.mark.asyncio
async def test_connect_is_idempotent(redis_client):
    with patch("redis.asyncio.Redis", return_value=AsyncMock()) as mock_redis:
        await redis_client.connect()
        await redis_client.connect()
        mock_redis.assert_called_once_with(
            host="localhost", port=6379, db=0, decode_responses=True
        )
        assert redis_client.is_connected


@pytest.mark.asyncio
async def test_failed_connect_leaves_client_unset(redis_client):
    with patch("redis.asyncio.Redis", return_value=AsyncMock()) as mock_redis:
        mock_redis.return_value.ping.side_effect = redis.ConnectionError("refused")
        with pytest.raises(redis.ConnectionError):
            await redis_client.connect()
        mock_redis.return_value.aclose.assert_awaited_once()
        assert not redis_client.is_connected


@pytest.mark.asyncio
async def test_publish_requires_connection(redis_client):
    with pytest.raises(RuntimeError):
        await redis_client.publish("realtime:chat_messages", "payload")


def test_pubsub_requires_connection(redis_client):
    with pytest.raises(RuntimeError):
        redis_client.pubsub()


def test_pubsub_comes_from_client(redis_client):
    redis_client.client = Mock()
    assert redis_client.pubsub() is redis_client.client.pubsub.return_value
