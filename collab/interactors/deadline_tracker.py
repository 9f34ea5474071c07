# collab/interactors/deadline_tracker.py
import logging
from datetime import UTC, datetime
from typing import Optional, Tuple

from collab.domain import schemas
from collab.gateways.interfaces import ITaskGateway

Deadlines = Tuple[schemas.Deadline, ...]


def as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they were written in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def classify(task: schemas.Task, now: datetime) -> schemas.Deadline:
    """
    Place a task with a due date into upcoming, overdue or completed.

    A completed task is completed whatever its due date. Otherwise the task
    is overdue once its due instant has passed. ``days_until`` counts
    calendar days in UTC, so a task due later today is 0 days away.
    """
    if task.due_date is None:
        raise ValueError(f"Task {task.id} has no due date")

    due = as_utc(task.due_date)
    now = as_utc(now)
    days_until = (due.date() - now.date()).days

    if task.status == schemas.TaskStatus.COMPLETED:
        status = schemas.DeadlineStatus.COMPLETED
    elif due < now:
        status = schemas.DeadlineStatus.OVERDUE
    else:
        status = schemas.DeadlineStatus.UPCOMING
    return schemas.Deadline(task=task, status=status, days_until=days_until)


class DeadlineTracker:
    def __init__(self, task_gateway: ITaskGateway):
        self.task_gateway = task_gateway
        self.logger = logging.getLogger("CollabSync.DeadlineTracker")
        self._deadlines: Deadlines = ()

    @property
    def deadlines(self) -> Deadlines:
        return self._deadlines

    async def load(self, now: Optional[datetime] = None) -> Deadlines:
        now = now or datetime.now(UTC)
        tasks = await self.task_gateway.get_with_due_date()
        self._deadlines = tuple(classify(task, now) for task in tasks)
        self.logger.info(f"Loaded {len(self._deadlines)} deadlines")
        return self._deadlines

    def filter_deadlines(
        self, status: Optional[schemas.DeadlineStatus] = None
    ) -> Deadlines:
        if status is None:
            return self._deadlines
        return tuple(d for d in self._deadlines if d.status == status)
