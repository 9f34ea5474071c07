# collab/main.py
import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import create_async_engine

from collab.client.collaboration_view import CollaborationView, ScrollHook
from collab.client.deadlines_view import DeadlinesView
from collab.client.permissions_view import PermissionsView
from collab.client.task_board_view import TaskBoardView
from collab.config import AppConfig
from collab.domain.events import (
    FileShared,
    MessageCreated,
    RoomCreated,
    TaskCreated,
    TaskStatusChanged,
)
from collab.gateways.file_gateway import FileGateway
from collab.gateways.message_gateway import MessageGateway
from collab.gateways.role_gateway import RoleGateway
from collab.gateways.room_gateway import RoomGateway
from collab.gateways.task_gateway import TaskGateway
from collab.infrastructure.database import create_database
from collab.infrastructure.event_dispatcher import EventDispatcher
from collab.infrastructure.event_handlers import EventHandlers
from collab.infrastructure.realtime import RealtimeChannel
from collab.infrastructure.redis_client import RedisClient
from collab.infrastructure.session import SessionProvider
from collab.interactors.deadline_tracker import DeadlineTracker
from collab.interactors.file_ledger import FileLedger
from collab.interactors.message_stream import MessageStream
from collab.interactors.permission_interactor import PermissionInteractor
from collab.interactors.room_directory import RoomDirectory
from collab.interactors.task_board import TaskBoard


class Application:
    def __init__(self, config: AppConfig):
        self.config = config
        self.logger = self.setup_logger()
        engine = create_async_engine(config.DATABASE_URL, echo=False)
        self.database = create_database(
            engine, logger=self.logger.getChild("Database")
        )
        self.redis_client = RedisClient(
            config.REDIS_HOST, config.REDIS_PORT, self.logger
        )
        self.event_dispatcher = EventDispatcher()
        self.event_handlers = EventHandlers(
            self.redis_client,
            config.REALTIME_CHANNEL_PREFIX,
            self.logger.getChild("EventHandlers"),
        )
        self.realtime = RealtimeChannel(
            self.redis_client,
            self.logger.getChild("Realtime"),
            prefix=config.REALTIME_CHANNEL_PREFIX,
            poll_timeout=config.REALTIME_POLL_TIMEOUT,
        )
        self.session_provider = SessionProvider()

        # Register event handlers
        self.event_dispatcher.register(
            RoomCreated, self.event_handlers.publish_room_created
        )
        self.event_dispatcher.register(
            MessageCreated, self.event_handlers.publish_message_created
        )
        self.event_dispatcher.register(
            FileShared, self.event_handlers.publish_file_shared
        )
        self.event_dispatcher.register(
            TaskCreated, self.event_handlers.publish_task_created
        )
        self.event_dispatcher.register(
            TaskStatusChanged, self.event_handlers.publish_task_status_changed
        )

    @asynccontextmanager
    async def lifespan(self) -> AsyncIterator["Application"]:
        await self.database.connect()
        await self.redis_client.connect()
        try:
            yield self
        finally:
            await self.redis_client.disconnect()
            await self.database.disconnect()

    def setup_logger(self) -> logging.Logger:
        logger = logging.getLogger("CollabSync")
        logger.setLevel(getattr(logging, self.config.LOG_LEVEL.upper(), logging.INFO))

        if not logger.handlers:
            c_handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            c_handler.setFormatter(formatter)
            logger.addHandler(c_handler)

        return logger

    def create_view(
        self,
        on_scroll_to_latest: Optional[ScrollHook] = None,
        session_provider: Optional[SessionProvider] = None,
    ) -> CollaborationView:
        return CollaborationView(
            room_directory=RoomDirectory(
                RoomGateway(self.database, self.event_dispatcher)
            ),
            message_stream=MessageStream(
                MessageGateway(self.database, self.event_dispatcher)
            ),
            file_ledger=FileLedger(
                FileGateway(self.database, self.event_dispatcher),
                url_base=self.config.FILE_URL_BASE,
            ),
            session_provider=session_provider or self.session_provider,
            realtime=self.realtime,
            on_scroll_to_latest=on_scroll_to_latest,
        )

    def create_permissions_view(self) -> PermissionsView:
        return PermissionsView(
            PermissionInteractor(RoleGateway(self.database)), self.session_provider
        )

    def create_task_board_view(
        self, session_provider: Optional[SessionProvider] = None
    ) -> TaskBoardView:
        return TaskBoardView(
            TaskBoard(TaskGateway(self.database, self.event_dispatcher)),
            session_provider or self.session_provider,
        )

    def create_deadlines_view(self) -> DeadlinesView:
        return DeadlinesView(
            DeadlineTracker(TaskGateway(self.database, self.event_dispatcher))
        )


def create() -> Application:
    config = AppConfig()
    application = Application(config)
    application.logger.info("Application created and configured")
    return application


async def run(application: Application) -> None:
    async with application.lifespan():
        view = application.create_view()
        await view.mount()
        try:
            # serve live updates until cancelled
            await asyncio.Event().wait()
        finally:
            await view.unmount()


if __name__ == "__main__":
    asyncio.run(run(create()))
