# collab/infrastructure/redis_client.py
import logging

import redis.asyncio as redis
from redis.asyncio.client import PubSub


class RedisClient:
    """Connection to the Redis server that carries the change feed."""

    def __init__(self, host: str, port: int, logger: logging.Logger, db: int = 0):
        self.host = host
        self.port = port
        self.db = db
        self.client: redis.Redis | None = None
        self.logger = logger

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def is_connected(self) -> bool:
        return self.client is not None

    def _require_client(self) -> redis.Redis:
        if self.client is None:
            raise RuntimeError("Redis client not connected")
        return self.client

    async def connect(self) -> None:
        if self.client is not None:
            return
        client = redis.Redis(
            host=self.host, port=self.port, db=self.db, decode_responses=True
        )
        try:
            await client.ping()
        except redis.ConnectionError as e:
            self.logger.error(f"Failed to connect to Redis: {e!s}")
            self.logger.error(f"Redis host: {self.host}, Redis port: {self.port}")
            await client.aclose()
            raise
        self.client = client
        self.logger.info(f"Successfully connected to Redis at {self.address}")

    async def disconnect(self) -> None:
        if self.client is None:
            return
        client, self.client = self.client, None
        await client.aclose()
        self.logger.info("Disconnected from Redis")

    async def publish(self, channel: str, message: str) -> int:
        receivers = await self._require_client().publish(channel, message)
        self.logger.debug(f"Published message to channel {channel}")
        return receivers

    def pubsub(self) -> PubSub:
        return self._require_client().pubsub()
