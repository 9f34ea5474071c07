# collab/gateways/file_gateway.py
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from collab.domain import schemas
from collab.domain.errors import FetchError
from collab.domain.events import FileShared
from collab.gateways.interfaces import IFileGateway
from collab.infrastructure import models
from collab.infrastructure.database import Database
from collab.infrastructure.event_dispatcher import EventDispatcher


class FileGateway(IFileGateway):
    def __init__(self, database: Database, event_dispatcher: EventDispatcher):
        self.database = database
        self.event_dispatcher = event_dispatcher

    async def get_all(self, room_id: int) -> List[schemas.SharedFile]:
        # newest first; equal timestamps keep insertion order
        stmt = (
            select(models.SharedFile)
            .filter(models.SharedFile.room_id == room_id)
            .order_by(models.SharedFile.created_at.desc(), models.SharedFile.id.asc())
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                files = result.scalars().all()
                return [schemas.SharedFile.model_validate(f) for f in files]
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to fetch files for room {room_id}: {e!s}") from e

    async def create_file(
        self, file: schemas.FileCreate, user_id: str
    ) -> schemas.SharedFile:
        db_file = models.SharedFile(
            room_id=file.room_id,
            user_id=user_id,
            name=file.name,
            description=file.description,
            url=file.url,
            size_bytes=file.size_bytes,
            mime_type=file.mime_type,
        )
        try:
            async with self.database.session() as session:
                session.add(db_file)
                await session.commit()
                await session.refresh(db_file)
                created = schemas.SharedFile.model_validate(db_file)
        except SQLAlchemyError as e:
            raise FetchError(
                f"Failed to share file in room {file.room_id}: {e!s}"
            ) from e

        await self.event_dispatcher.dispatch(FileShared(file=created))
        return created
