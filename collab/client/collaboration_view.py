import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from collab.client.state_manager import CollaborationState, ViewPhase
from collab.domain import schemas
from collab.domain.errors import AuthRequiredError, FetchError, ValidationError
from collab.domain.results import Accepted, Failed, Rejected, Result
from collab.infrastructure.realtime import RealtimeChannel, Subscription
from collab.infrastructure.session import SessionProvider
from collab.interactors.file_ledger import FileLedger
from collab.interactors.message_stream import MessageStream
from collab.interactors.room_directory import RoomDirectory

MESSAGES_TABLE = "chat_messages"

ScrollHook = Callable[[Optional[schemas.ChatMessage]], None]


class CollaborationView:
    """
    Rooms, messages and files of one mounted three-pane view.

    A single live subscription on the messages collection is held while
    mounted. Incoming rows are matched against the room selected at delivery
    time; rows for any other room are dropped, and are not recovered when
    that room is selected later.

    Every room selection bumps a generation counter. History and file
    responses that arrive for an older generation are discarded, so a slow
    response for a previous room never overwrites the current one. Live
    messages that arrive while the selected room's history is still loading
    are buffered and appended, in arrival order, once it resolves.
    """

    def __init__(
        self,
        room_directory: RoomDirectory,
        message_stream: MessageStream,
        file_ledger: FileLedger,
        session_provider: SessionProvider,
        realtime: RealtimeChannel,
        state: Optional[CollaborationState] = None,
        on_scroll_to_latest: Optional[ScrollHook] = None,
    ) -> None:
        self.room_directory = room_directory
        self.message_stream = message_stream
        self.file_ledger = file_ledger
        self.session_provider = session_provider
        self.realtime = realtime
        self.state = state or CollaborationState()
        self.on_scroll_to_latest = on_scroll_to_latest
        self.logger = logging.getLogger("CollabSync.CollaborationView")

        self._subscription: Optional[Subscription] = None
        self._generation = 0
        self._history_pending = False
        self._live_buffer: List[schemas.ChatMessage] = []

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None

    @property
    def selected_room(self) -> Optional[schemas.ChatRoom]:
        return self.room_directory.selected

    async def mount(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = await self.realtime.subscribe(
            MESSAGES_TABLE, self._on_message_inserted
        )
        self.logger.info("View mounted")
        await self.refresh_rooms()

    async def unmount(self) -> None:
        if self._subscription is None:
            return
        subscription, self._subscription = self._subscription, None
        await subscription.unsubscribe()
        self.logger.info("View unmounted")

    def is_own_message(self, message: schemas.ChatMessage) -> bool:
        identity = self.session_provider.get_current_user()
        return identity is not None and identity.id == message.user_id

    # Rooms
    async def refresh_rooms(self) -> None:
        try:
            await self.room_directory.list_rooms()
        except FetchError as e:
            self.logger.error(f"Error fetching rooms: {e!s}")
            self.state.set_error(str(e))

        self.state.set_rooms(self.room_directory.rooms)
        if self.state.phase == ViewPhase.LOADING:
            self.state.set_phase(ViewPhase.ROOMS_LOADED)

        room = self.room_directory.select_default()
        if room is not None:
            await self.select_room(room)

    async def create_room(self, name: str, description: str = "") -> Result:
        identity = self.session_provider.get_current_user()
        try:
            room = await self.room_directory.create_room(identity, name, description)
        except (AuthRequiredError, ValidationError) as e:
            self.logger.warning(f"Room not created: {e!s}")
            return Rejected(str(e))
        except FetchError as e:
            self.logger.error(f"Error creating room: {e!s}")
            self.state.set_error(str(e))
            return Failed(e)

        self.state.set_rooms(self.room_directory.rooms)
        default = self.room_directory.select_default()
        if default is not None:
            await self.select_room(default)
        return Accepted(room)

    async def select_room(self, room: schemas.ChatRoom) -> None:
        self._generation += 1
        generation = self._generation

        self.room_directory.select(room)
        self._history_pending = True
        self._live_buffer = []
        self.state.set_selected_room(room)
        self.state.set_phase(ViewPhase.ROOM_ACTIVE)

        # show whatever is cached for this room until the reload lands
        self._show_messages(room.id)
        self.state.set_files(self.file_ledger.files(room.id))

        await asyncio.gather(
            self._load_messages(room.id, generation),
            self._load_files(room.id, generation),
        )

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    # Messages
    async def _load_messages(self, room_id: int, generation: int) -> None:
        try:
            await self.message_stream.load_history(room_id)
        except FetchError as e:
            self.logger.error(f"Error fetching messages: {e!s}")
            if self._is_current(generation):
                self.state.set_error(str(e))

        if not self._is_current(generation):
            self.logger.debug(f"Discarding stale history for room {room_id}")
            return

        self._history_pending = False
        buffered, self._live_buffer = self._live_buffer, []
        for message in buffered:
            self.message_stream.append(message)
        self._show_messages(room_id)

    def _on_message_inserted(self, record: Dict[str, Any]) -> None:
        message = schemas.ChatMessage.model_validate(record)
        selected = self.room_directory.selected
        if selected is None or message.room_id != selected.id:
            self.logger.debug(
                f"Dropping live message {message.id} for room {message.room_id}"
            )
            return
        self._accept_message(message)

    def _accept_message(self, message: schemas.ChatMessage) -> None:
        if self._history_pending:
            self._live_buffer.append(message)
            return
        if self.message_stream.append(message):
            self._show_messages(message.room_id)

    def _show_messages(self, room_id: int) -> None:
        messages = self.message_stream.history(room_id)
        if messages is self.state.messages:
            return
        self.state.set_messages(messages)
        self._scroll_to_latest()

    def _scroll_to_latest(self) -> None:
        if self.on_scroll_to_latest is None:
            return
        messages = self.state.messages
        try:
            self.on_scroll_to_latest(messages[-1] if messages else None)
        except Exception as e:
            self.logger.error(f"Error in scroll hook: {e!s}")

    async def send_message(self, content: str) -> Result:
        room = self.room_directory.selected
        if room is None:
            return Rejected("no room selected")

        identity = self.session_provider.get_current_user()
        try:
            result = await self.message_stream.send(room.id, content, identity)
        except FetchError as e:
            self.logger.error(f"Error sending message: {e!s}")
            self.state.set_error(str(e))
            return Failed(e)

        if isinstance(result, Accepted):
            selected = self.room_directory.selected
            if selected is not None and selected.id == room.id:
                self._accept_message(result.value)
        else:
            self.logger.debug(f"Message not sent: {result.reason}")
        return result

    # Files
    async def _load_files(self, room_id: int, generation: int) -> None:
        try:
            await self.file_ledger.list_files(room_id)
        except FetchError as e:
            self.logger.error(f"Error fetching files: {e!s}")
            if self._is_current(generation):
                self.state.set_error(str(e))

        if not self._is_current(generation):
            self.logger.debug(f"Discarding stale files for room {room_id}")
            return
        self.state.set_files(self.file_ledger.files(room_id))

    async def attach_file(self, file_meta: schemas.FileMeta) -> Result:
        room = self.room_directory.selected
        if room is None:
            return Rejected("no room selected")

        identity = self.session_provider.get_current_user()
        try:
            shared = await self.file_ledger.attach(room.id, file_meta, identity)
        except (AuthRequiredError, ValidationError) as e:
            self.logger.warning(f"File not attached: {e!s}")
            return Rejected(str(e))
        except FetchError as e:
            self.logger.error(f"Error uploading file: {e!s}")
            self.state.set_error(str(e))
            return Failed(e)

        selected = self.room_directory.selected
        if selected is not None and selected.id == room.id:
            self.state.set_files(self.file_ledger.files(room.id))
        return Accepted(shared)
