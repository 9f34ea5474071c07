# collab/gateways/task_gateway.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from collab.domain import schemas
from collab.domain.errors import FetchError
from collab.domain.events import TaskCreated, TaskStatusChanged
from collab.gateways.interfaces import ITaskGateway
from collab.infrastructure import models
from collab.infrastructure.database import Database
from collab.infrastructure.event_dispatcher import EventDispatcher


class TaskGateway(ITaskGateway):
    def __init__(self, database: Database, event_dispatcher: EventDispatcher):
        self.database = database
        self.event_dispatcher = event_dispatcher

    async def _fetch(self, stmt, what: str) -> List[schemas.Task]:
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                return [schemas.Task.model_validate(t) for t in result.scalars().all()]
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to fetch {what}: {e!s}") from e

    async def get_all(
        self, status: Optional[schemas.TaskStatus] = None
    ) -> List[schemas.Task]:
        stmt = select(models.Task).order_by(
            models.Task.created_at.desc(), models.Task.id.desc()
        )
        if status is not None:
            stmt = stmt.filter(models.Task.status == status.value)
        return await self._fetch(stmt, "tasks")

    async def get_with_due_date(self) -> List[schemas.Task]:
        stmt = (
            select(models.Task)
            .filter(models.Task.due_date.is_not(None))
            .order_by(models.Task.due_date.asc(), models.Task.id.asc())
        )
        return await self._fetch(stmt, "deadlines")

    async def create_task(
        self, task: schemas.TaskCreate, user_id: str
    ) -> schemas.Task:
        db_task = models.Task(
            title=task.title,
            description=task.description,
            priority=task.priority.value,
            status=schemas.TaskStatus.TODO.value,
            due_date=task.due_date,
            assigned_to=task.assigned_to,
            created_by=user_id,
        )
        try:
            async with self.database.session() as session:
                session.add(db_task)
                await session.commit()
                await session.refresh(db_task)
                created = schemas.Task.model_validate(db_task)
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to create task: {e!s}") from e

        await self.event_dispatcher.dispatch(TaskCreated(task=created))
        return created

    async def update_status(
        self, task_id: int, status: schemas.TaskStatus
    ) -> Optional[schemas.Task]:
        try:
            async with self.database.session() as session:
                db_task = await session.get(models.Task, task_id)
                if db_task is None:
                    return None
                db_task.status = status.value
                await session.commit()
                await session.refresh(db_task)
                updated = schemas.Task.model_validate(db_task)
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to update task {task_id}: {e!s}") from e

        await self.event_dispatcher.dispatch(TaskStatusChanged(task=updated))
        return updated
