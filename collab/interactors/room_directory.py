# collab/interactors/room_directory.py
import logging
from typing import Optional, Tuple

from collab.domain import schemas
from collab.domain.errors import AuthRequiredError, FetchError, ValidationError
from collab.gateways.interfaces import IRoomGateway


class RoomDirectory:
    """Lists and creates chat rooms and remembers which one is selected."""

    def __init__(self, room_gateway: IRoomGateway):
        self.room_gateway = room_gateway
        self.logger = logging.getLogger("CollabSync.RoomDirectory")
        self._rooms: Tuple[schemas.ChatRoom, ...] = ()
        self._selected: Optional[schemas.ChatRoom] = None

    @property
    def rooms(self) -> Tuple[schemas.ChatRoom, ...]:
        return self._rooms

    @property
    def selected(self) -> Optional[schemas.ChatRoom]:
        return self._selected

    async def list_rooms(self) -> Tuple[schemas.ChatRoom, ...]:
        rooms = await self.room_gateway.get_all()
        self._rooms = tuple(rooms)
        self.logger.info(f"Loaded {len(self._rooms)} rooms")
        return self._rooms

    async def create_room(
        self,
        identity: Optional[schemas.Identity],
        name: str,
        description: Optional[str] = None,
    ) -> schemas.ChatRoom:
        if identity is None:
            raise AuthRequiredError("Not authenticated")
        name = (name or "").strip()
        if not name:
            raise ValidationError("Room name must not be empty")

        room = await self.room_gateway.create_room(
            schemas.RoomCreate(name=name, description=description or None),
            identity.id,
        )
        self.logger.info(f"Created room {room.id} ({room.name})")

        try:
            await self.list_rooms()
        except FetchError as e:
            self.logger.error(f"Error fetching rooms after create: {e!s}")
        return room

    def select(self, room: Optional[schemas.ChatRoom]) -> None:
        self._selected = room

    def select_default(self) -> Optional[schemas.ChatRoom]:
        """Select the oldest room when nothing is selected yet."""
        if self._selected is None and self._rooms:
            self._selected = self._rooms[0]
            return self._selected
        return None
