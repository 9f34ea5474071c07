# collab/domain/schemas.py
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    id: str
    email: str | None = None

    model_config = ConfigDict(frozen=True)


class RoomCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None


class ChatRoom(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_by: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class MessageCreate(BaseModel):
    room_id: int
    content: str = Field(..., min_length=1)


class ChatMessage(BaseModel):
    id: int
    room_id: int
    user_id: str
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class FileMeta(BaseModel):
    """What the caller knows about a picked file before it is shared."""

    name: str
    size: int = Field(0, ge=0)
    mime_type: str = ""
    description: str = ""


class FileCreate(BaseModel):
    room_id: int
    name: str = Field(..., min_length=1)
    description: str | None = None
    url: str
    size_bytes: int = Field(0, ge=0)
    mime_type: str = ""


class SharedFile(BaseModel):
    id: int
    room_id: int
    user_id: str
    name: str
    description: str | None = None
    url: str
    size_bytes: int
    mime_type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class Role(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


class UserRole(BaseModel):
    id: int
    user_id: str
    role: Role
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class UserProfile(BaseModel):
    user_id: str
    full_name: str
    avatar_url: str | None = None
    job_title: str | None = None
    department: str | None = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class MemberRole(UserRole):
    full_name: str | None = None
    job_title: str | None = None
    department: str | None = None


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    COMPLETED = "completed"


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    assigned_to: str | None = None


class Task(BaseModel):
    id: int
    title: str
    description: str | None = None
    priority: TaskPriority
    status: TaskStatus
    due_date: datetime | None = None
    assigned_to: str | None = None
    created_by: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class DeadlineStatus(str, Enum):
    UPCOMING = "upcoming"
    OVERDUE = "overdue"
    COMPLETED = "completed"


class Deadline(BaseModel):
    """A task with a due date, classified against a point in time."""

    task: Task
    status: DeadlineStatus
    days_until: int

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        if self.status == DeadlineStatus.COMPLETED:
            return "Completed"
        if self.status == DeadlineStatus.OVERDUE:
            return "Overdue"
        if self.days_until == 0:
            return "Due today"
        if self.days_until == 1:
            return "Due tomorrow"
        return f"Due in {self.days_until} days"
