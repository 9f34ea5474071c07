# collab/gateways/interfaces.py
from abc import ABC, abstractmethod
from typing import List, Optional

from collab.domain import schemas


class IRoomGateway(ABC):
    @abstractmethod
    async def get_all(self) -> List[schemas.ChatRoom]:
        pass

    @abstractmethod
    async def create_room(
        self, room: schemas.RoomCreate, user_id: str
    ) -> schemas.ChatRoom:
        pass


class IMessageGateway(ABC):
    @abstractmethod
    async def get_all(self, room_id: int) -> List[schemas.ChatMessage]:
        pass

    @abstractmethod
    async def create_message(
        self, message: schemas.MessageCreate, user_id: str
    ) -> schemas.ChatMessage:
        pass


class IFileGateway(ABC):
    @abstractmethod
    async def get_all(self, room_id: int) -> List[schemas.SharedFile]:
        pass

    @abstractmethod
    async def create_file(
        self, file: schemas.FileCreate, user_id: str
    ) -> schemas.SharedFile:
        pass


class IRoleGateway(ABC):
    @abstractmethod
    async def get_role(self, user_id: str) -> Optional[schemas.UserRole]:
        pass

    @abstractmethod
    async def get_members(self) -> List[schemas.MemberRole]:
        pass

    @abstractmethod
    async def update_role(
        self, user_id: str, role: schemas.Role
    ) -> Optional[schemas.UserRole]:
        pass

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[schemas.UserProfile]:
        pass


class ITaskGateway(ABC):
    @abstractmethod
    async def get_all(
        self, status: Optional[schemas.TaskStatus] = None
    ) -> List[schemas.Task]:
        pass

    @abstractmethod
    async def get_with_due_date(self) -> List[schemas.Task]:
        pass

    @abstractmethod
    async def create_task(
        self, task: schemas.TaskCreate, user_id: str
    ) -> schemas.Task:
        pass

    @abstractmethod
    async def update_status(
        self, task_id: int, status: schemas.TaskStatus
    ) -> Optional[schemas.Task]:
        pass
