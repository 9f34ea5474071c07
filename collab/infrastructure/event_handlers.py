import logging
from typing import Any

import redis.asyncio as redis

from collab.domain.events import (
    FileShared,
    InsertEvent,
    MessageCreated,
    RoomCreated,
    TaskCreated,
    TaskStatusChanged,
)


class EventHandlers:
    """Publishes store changes on the realtime change feed."""

    def __init__(
        self,
        redis_client,
        channel_prefix: str = "realtime",
        logger: logging.Logger | None = None,
    ):
        self.redis_client = redis_client
        self.channel_prefix = channel_prefix
        self.logger = logger or logging.getLogger("CollabSync.EventHandlers")

    def channel_for(self, table: str) -> str:
        return f"{self.channel_prefix}:{table}"

    async def publish_change(
        self, table: str, record: dict[str, Any], change_type: str = "INSERT"
    ) -> None:
        payload = InsertEvent(
            type=change_type, table=table, record=record
        ).model_dump_json()
        try:
            await self.redis_client.publish(self.channel_for(table), payload)
        except (redis.RedisError, RuntimeError) as e:
            # row is committed; readers pick it up on the next fetch
            self.logger.error(
                f"Failed to publish {change_type.lower()} on {table}: {e!s}"
            )

    async def publish_insert(self, table: str, record: dict[str, Any]) -> None:
        await self.publish_change(table, record, "INSERT")

    async def publish_room_created(self, event: RoomCreated):
        await self.publish_insert("chat_rooms", event.room.model_dump(mode="json"))

    async def publish_message_created(self, event: MessageCreated):
        await self.publish_insert(
            "chat_messages", event.message.model_dump(mode="json")
        )

    async def publish_file_shared(self, event: FileShared):
        await self.publish_insert("shared_files", event.file.model_dump(mode="json"))

    async def publish_task_created(self, event: TaskCreated):
        await self.publish_insert("tasks", event.task.model_dump(mode="json"))

    async def publish_task_status_changed(self, event: TaskStatusChanged):
        await self.publish_change(
            "tasks", event.task.model_dump(mode="json"), "UPDATE"
        )
