# collab/gateways/message_gateway.py
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from collab.domain import schemas
from collab.domain.errors import FetchError
from collab.domain.events import MessageCreated
from collab.gateways.interfaces import IMessageGateway
from collab.infrastructure import models
from collab.infrastructure.database import Database
from collab.infrastructure.event_dispatcher import EventDispatcher


class MessageGateway(IMessageGateway):
    def __init__(self, database: Database, event_dispatcher: EventDispatcher):
        self.database = database
        self.event_dispatcher = event_dispatcher

    async def get_all(self, room_id: int) -> List[schemas.ChatMessage]:
        stmt = (
            select(models.ChatMessage)
            .filter(models.ChatMessage.room_id == room_id)
            .order_by(models.ChatMessage.created_at.asc(), models.ChatMessage.id.asc())
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                messages = result.scalars().all()
                return [schemas.ChatMessage.model_validate(m) for m in messages]
        except SQLAlchemyError as e:
            raise FetchError(
                f"Failed to fetch messages for room {room_id}: {e!s}"
            ) from e

    async def create_message(
        self, message: schemas.MessageCreate, user_id: str
    ) -> schemas.ChatMessage:
        db_message = models.ChatMessage(
            room_id=message.room_id, user_id=user_id, content=message.content
        )
        try:
            async with self.database.session() as session:
                session.add(db_message)
                await session.commit()
                await session.refresh(db_message)
                created = schemas.ChatMessage.model_validate(db_message)
        except SQLAlchemyError as e:
            raise FetchError(
                f"Failed to send message to room {message.room_id}: {e!s}"
            ) from e

        await self.event_dispatcher.dispatch(MessageCreated(message=created))
        return created
