# collab/interactors/message_stream.py
import logging
from typing import Dict, Iterable, Optional, Tuple

from collab.domain import schemas
from collab.domain.results import Accepted, Rejected, Result
from collab.gateways.interfaces import IMessageGateway

Messages = Tuple[schemas.ChatMessage, ...]


def unique_by_id(messages: Iterable[schemas.ChatMessage]) -> Messages:
    seen = set()
    ordered = []
    for message in messages:
        if message.id not in seen:
            seen.add(message.id)
            ordered.append(message)
    return tuple(ordered)


class MessageStream:
    """
    Per-room message history.

    Each room's sequence is history order followed by append order, with at
    most one entry per message id. Sequences are replaced, never mutated, and
    are kept for the lifetime of the stream.
    """

    def __init__(self, message_gateway: IMessageGateway):
        self.message_gateway = message_gateway
        self.logger = logging.getLogger("CollabSync.MessageStream")
        self._histories: Dict[int, Messages] = {}

    def history(self, room_id: int) -> Messages:
        return self._histories.get(room_id, ())

    async def load_history(self, room_id: int) -> Messages:
        messages = await self.message_gateway.get_all(room_id)
        self._histories[room_id] = unique_by_id(messages)
        self.logger.info(
            f"Loaded {len(self._histories[room_id])} messages for room {room_id}"
        )
        return self._histories[room_id]

    def append(self, message: schemas.ChatMessage) -> bool:
        current = self.history(message.room_id)
        if any(existing.id == message.id for existing in current):
            return False
        self._histories[message.room_id] = current + (message,)
        return True

    async def send(
        self,
        room_id: int,
        content: str,
        identity: Optional[schemas.Identity],
    ) -> Result:
        text = (content or "").strip()
        if not text:
            return Rejected("empty message")
        if identity is None:
            return Rejected("not authenticated")

        message = await self.message_gateway.create_message(
            schemas.MessageCreate(room_id=room_id, content=text), identity.id
        )
        self.logger.info(f"Message {message.id} sent to room {room_id}")
        return Accepted(message)
