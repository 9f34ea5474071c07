# collab/domain/events.py
from typing import Any

from pydantic import BaseModel

from collab.domain.schemas import ChatMessage, ChatRoom, SharedFile, Task


class Event(BaseModel):
    pass


class RoomCreated(Event):
    room: ChatRoom


class MessageCreated(Event):
    message: ChatMessage


class FileShared(Event):
    file: SharedFile


class InsertEvent(BaseModel):
    """Wire format of a change-feed notification."""

    type: str = "INSERT"
    table: str
    record: dict[str, Any]


class TaskCreated(Event):
    task: Task


class TaskStatusChanged(Event):
    task: Task
