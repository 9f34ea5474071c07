# collab/interactors/task_board.py
import logging
from datetime import datetime
from typing import Optional, Tuple

from collab.domain import schemas
from collab.domain.errors import AuthRequiredError, FetchError, ValidationError
from collab.gateways.interfaces import ITaskGateway

Tasks = Tuple[schemas.Task, ...]


class TaskBoard:
    """Creates and lists tasks, newest first, with an optional status filter."""

    def __init__(self, task_gateway: ITaskGateway):
        self.task_gateway = task_gateway
        self.logger = logging.getLogger("CollabSync.TaskBoard")
        self._tasks: Tasks = ()

    @property
    def tasks(self) -> Tasks:
        return self._tasks

    def filter_tasks(self, status: Optional[schemas.TaskStatus] = None) -> Tasks:
        if status is None:
            return self._tasks
        return tuple(task for task in self._tasks if task.status == status)

    async def list_tasks(self) -> Tasks:
        self._tasks = tuple(await self.task_gateway.get_all())
        self.logger.info(f"Loaded {len(self._tasks)} tasks")
        return self._tasks

    async def create_task(
        self,
        identity: Optional[schemas.Identity],
        title: str,
        description: Optional[str] = None,
        priority: schemas.TaskPriority = schemas.TaskPriority.MEDIUM,
        due_date: Optional[datetime] = None,
        assigned_to: Optional[str] = None,
    ) -> schemas.Task:
        if identity is None:
            raise AuthRequiredError("Not authenticated")
        title = (title or "").strip()
        if not title:
            raise ValidationError("Task title must not be empty")

        task = await self.task_gateway.create_task(
            schemas.TaskCreate(
                title=title,
                description=description or None,
                priority=priority,
                due_date=due_date,
                assigned_to=assigned_to or None,
            ),
            identity.id,
        )
        self.logger.info(f"Created task {task.id} ({task.title})")
        await self._relist("create")
        return task

    async def update_status(
        self,
        identity: Optional[schemas.Identity],
        task_id: int,
        status: schemas.TaskStatus,
    ) -> schemas.Task:
        if identity is None:
            raise AuthRequiredError("Not authenticated")

        task = await self.task_gateway.update_status(task_id, status)
        if task is None:
            raise ValidationError(f"Task {task_id} does not exist")
        self.logger.info(f"Task {task_id} moved to {status.value}")
        await self._relist("status change")
        return task

    async def _relist(self, after: str) -> None:
        try:
            await self.list_tasks()
        except FetchError as e:
            self.logger.error(f"Error fetching tasks after {after}: {e!s}")
