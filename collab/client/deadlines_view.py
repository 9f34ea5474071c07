import logging
from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from collab.domain import schemas
from collab.domain.errors import FetchError
from collab.interactors.deadline_tracker import DeadlineTracker


class DeadlinesView:
    def __init__(
        self,
        tracker: DeadlineTracker,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.tracker = tracker
        self.clock = clock
        self.logger = logging.getLogger("CollabSync.DeadlinesView")

        self.status_filter: Optional[schemas.DeadlineStatus] = None
        self.error: Optional[str] = None
        self.loading = True

    @property
    def visible_deadlines(self) -> Tuple[schemas.Deadline, ...]:
        return self.tracker.filter_deadlines(self.status_filter)

    @property
    def counts(self) -> Dict[schemas.DeadlineStatus, int]:
        return {
            status: len(self.tracker.filter_deadlines(status))
            for status in schemas.DeadlineStatus
        }

    def set_filter(self, status: Optional[schemas.DeadlineStatus]) -> None:
        self.status_filter = status

    async def load(self) -> None:
        now = self.clock() if self.clock else None
        try:
            await self.tracker.load(now)
            self.error = None
        except FetchError as e:
            self.logger.error(f"Error fetching deadlines: {e!s}")
            self.error = str(e) or "An error occurred"
        finally:
            self.loading = False
