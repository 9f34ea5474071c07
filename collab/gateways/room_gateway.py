# collab/gateways/room_gateway.py
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from collab.domain import schemas
from collab.domain.errors import FetchError
from collab.domain.events import RoomCreated
from collab.gateways.interfaces import IRoomGateway
from collab.infrastructure import models
from collab.infrastructure.database import Database
from collab.infrastructure.event_dispatcher import EventDispatcher


class RoomGateway(IRoomGateway):
    def __init__(self, database: Database, event_dispatcher: EventDispatcher):
        self.database = database
        self.event_dispatcher = event_dispatcher

    async def get_all(self) -> List[schemas.ChatRoom]:
        stmt = select(models.ChatRoom).order_by(
            models.ChatRoom.created_at.asc(), models.ChatRoom.id.asc()
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                rooms = result.scalars().all()
                return [schemas.ChatRoom.model_validate(room) for room in rooms]
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to fetch chat rooms: {e!s}") from e

    async def create_room(
        self, room: schemas.RoomCreate, user_id: str
    ) -> schemas.ChatRoom:
        db_room = models.ChatRoom(
            name=room.name, description=room.description, created_by=user_id
        )
        try:
            async with self.database.session() as session:
                session.add(db_room)
                await session.commit()
                await session.refresh(db_room)
                created = schemas.ChatRoom.model_validate(db_room)
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to create chat room: {e!s}") from e

        await self.event_dispatcher.dispatch(RoomCreated(room=created))
        return created
