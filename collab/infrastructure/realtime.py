# collab/infrastructure/realtime.py
import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

import redis.asyncio as redis
from pydantic import ValidationError

from collab.domain.events import InsertEvent
from collab.infrastructure.redis_client import RedisClient

RECONNECT_DELAY = 5.0

InsertHandler = Callable[[dict[str, Any]], Any]


class Subscription:
    """
    A live feed of insert events for one collection.

    Every inserted row is delivered, in publish order, to the single handler
    registered at subscribe time. Handlers may be plain functions or
    coroutines; they run on the listener task one at a time.
    """

    def __init__(
        self,
        channel_name: str,
        pubsub,
        handler: InsertHandler,
        logger: logging.Logger,
        poll_timeout: float = 1.0,
    ):
        self.channel_name = channel_name
        self.pubsub = pubsub
        self.handler = handler
        self.logger = logger
        self.poll_timeout = poll_timeout
        self._task: asyncio.Task | None = None

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_active:
            return
        self._task = asyncio.create_task(
            self._listen(), name=f"realtime:{self.channel_name}"
        )

    async def _listen(self) -> None:
        while True:
            try:
                message = await self.pubsub.get_message(
                    ignore_subscribe_messages=True, timeout=self.poll_timeout
                )
            except redis.ConnectionError as e:
                self.logger.error(
                    f"Redis connection error on channel '{self.channel_name}': {e!s}. "
                    f"Retrying in {RECONNECT_DELAY:g} seconds..."
                )
                await asyncio.sleep(RECONNECT_DELAY)
                continue
            except Exception as e:
                self.logger.error(
                    f"Unexpected error in pubsub listener on channel "
                    f"'{self.channel_name}': {e!s}. Continuing..."
                )
                await asyncio.sleep(self.poll_timeout)
                continue
            if message is None:
                await asyncio.sleep(0)
                continue
            if message.get("type") != "message":
                continue
            await self.deliver(message["data"])

    async def deliver(self, data: str | bytes) -> None:
        try:
            event = InsertEvent.model_validate_json(data)
        except ValidationError as e:
            self.logger.error(
                f"Malformed payload on channel '{self.channel_name}': {e!s}"
            )
            return

        if event.type != "INSERT":
            self.logger.debug(
                f"Ignoring {event.type} event on channel '{self.channel_name}'"
            )
            return

        try:
            result = self.handler(event.record)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self.logger.error(
                f"Error in handler for channel '{self.channel_name}': {e!s}"
            )

    async def unsubscribe(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        await self.pubsub.unsubscribe(self.channel_name)
        await self.pubsub.aclose()
        self.logger.info(f"Unsubscribed from channel '{self.channel_name}'")


class RealtimeChannel:
    def __init__(
        self,
        redis_client: RedisClient,
        logger: logging.Logger | None = None,
        prefix: str = "realtime",
        poll_timeout: float = 1.0,
    ):
        self.redis_client = redis_client
        self.logger = logger or logging.getLogger("CollabSync.Realtime")
        self.prefix = prefix
        self.poll_timeout = poll_timeout

    def channel_for(self, table: str) -> str:
        return f"{self.prefix}:{table}"

    async def subscribe(self, table: str, handler: InsertHandler) -> Subscription:
        channel_name = self.channel_for(table)
        pubsub = self.redis_client.pubsub()
        await pubsub.subscribe(channel_name)
        subscription = Subscription(
            channel_name, pubsub, handler, self.logger, self.poll_timeout
        )
        subscription.start()
        self.logger.info(f"Subscribed to channel '{channel_name}'")
        return subscription
