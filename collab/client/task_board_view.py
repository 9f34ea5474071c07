import logging
from datetime import datetime
from typing import Optional, Tuple

from collab.domain import schemas
from collab.domain.errors import AuthRequiredError, FetchError, ValidationError
from collab.domain.results import Accepted, Failed, Rejected, Result
from collab.infrastructure.session import SessionProvider
from collab.interactors.task_board import TaskBoard


class TaskBoardView:
    """Task list with a status filter. Load failures are kept as error text."""

    def __init__(self, task_board: TaskBoard, session_provider: SessionProvider):
        self.task_board = task_board
        self.session_provider = session_provider
        self.logger = logging.getLogger("CollabSync.TaskBoardView")

        self.status_filter: Optional[schemas.TaskStatus] = None
        self.error: Optional[str] = None
        self.loading = True

    @property
    def can_create_tasks(self) -> bool:
        return self.session_provider.is_authenticated

    @property
    def visible_tasks(self) -> Tuple[schemas.Task, ...]:
        return self.task_board.filter_tasks(self.status_filter)

    def set_filter(self, status: Optional[schemas.TaskStatus]) -> None:
        self.status_filter = status

    async def load(self) -> None:
        try:
            await self.task_board.list_tasks()
            self.error = None
        except FetchError as e:
            self.logger.error(f"Error fetching tasks: {e!s}")
            self.error = str(e) or "An error occurred"
        finally:
            self.loading = False

    async def create_task(
        self,
        title: str,
        description: str = "",
        priority: schemas.TaskPriority = schemas.TaskPriority.MEDIUM,
        due_date: Optional[datetime] = None,
        assigned_to: Optional[str] = None,
    ) -> Result:
        identity = self.session_provider.get_current_user()
        try:
            task = await self.task_board.create_task(
                identity, title, description, priority, due_date, assigned_to
            )
        except (AuthRequiredError, ValidationError) as e:
            self.logger.warning(f"Task not created: {e!s}")
            return Rejected(str(e))
        except FetchError as e:
            self.logger.error(f"Error creating task: {e!s}")
            self.error = str(e)
            return Failed(e)
        return Accepted(task)

    async def set_status(self, task_id: int, status: schemas.TaskStatus) -> Result:
        identity = self.session_provider.get_current_user()
        try:
            task = await self.task_board.update_status(identity, task_id, status)
        except (AuthRequiredError, ValidationError) as e:
            self.logger.warning(f"Task {task_id} not updated: {e!s}")
            return Rejected(str(e))
        except FetchError as e:
            self.logger.error(f"Error updating task {task_id}: {e!s}")
            self.error = str(e)
            return Failed(e)
        return Accepted(task)
