import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from collab.domain import schemas


class StateEvent(Enum):
    """Events that can trigger state changes."""

    ROOMS_LOADED = "rooms_loaded"
    ROOM_SELECTED = "room_selected"
    MESSAGES_CHANGED = "messages_changed"
    FILES_CHANGED = "files_changed"
    PHASE_CHANGED = "phase_changed"
    ERROR_RAISED = "error_raised"


class ViewPhase(Enum):
    LOADING = "loading"
    ROOMS_LOADED = "rooms_loaded"
    ROOM_ACTIVE = "room_active"


class CollaborationState:
    """
    Observable state of one collaboration view.

    Sequences are stored as tuples and replaced on every change so observers
    can compare them by identity. Everything runs on the event loop, so no
    locking is needed.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger("CollabSync.CollaborationState")

        self._phase: ViewPhase = ViewPhase.LOADING
        self._rooms: Tuple[schemas.ChatRoom, ...] = ()
        self._selected_room: Optional[schemas.ChatRoom] = None
        self._messages: Tuple[schemas.ChatMessage, ...] = ()
        self._files: Tuple[schemas.SharedFile, ...] = ()
        self._last_error: Optional[str] = None

        # Observer callbacks: event -> list of callbacks
        self._observers: Dict[StateEvent, List[Callable]] = {
            event: [] for event in StateEvent
        }

    # Observer pattern methods
    def subscribe(
        self, event: StateEvent, callback: Callable[[Dict[str, Any]], None]
    ) -> None:
        """Subscribe to state changes for a specific event."""
        if callback not in self._observers[event]:
            self._observers[event].append(callback)
            self.logger.debug(f"Subscribed to {event.value}")

    def unsubscribe(
        self, event: StateEvent, callback: Callable[[Dict[str, Any]], None]
    ) -> None:
        """Unsubscribe from state changes for a specific event."""
        if callback in self._observers[event]:
            self._observers[event].remove(callback)
            self.logger.debug(f"Unsubscribed from {event.value}")

    def _notify_observers(self, event: StateEvent, data: Dict[str, Any]) -> None:
        for callback in list(self._observers[event]):
            try:
                callback(data)
            except Exception as e:
                self.logger.error(
                    f"Error in observer callback for {event.value}: {str(e)}"
                )

    @property
    def phase(self) -> ViewPhase:
        return self._phase

    @property
    def rooms(self) -> Tuple[schemas.ChatRoom, ...]:
        return self._rooms

    @property
    def selected_room(self) -> Optional[schemas.ChatRoom]:
        return self._selected_room

    @property
    def messages(self) -> Tuple[schemas.ChatMessage, ...]:
        return self._messages

    @property
    def files(self) -> Tuple[schemas.SharedFile, ...]:
        return self._files

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def set_phase(self, phase: ViewPhase) -> None:
        old_phase = self._phase
        self._phase = phase
        if old_phase != phase:
            self._notify_observers(
                StateEvent.PHASE_CHANGED, {"old_phase": old_phase, "new_phase": phase}
            )
            self.logger.debug(f"Phase changed from {old_phase.value} to {phase.value}")

    def set_rooms(self, rooms: Tuple[schemas.ChatRoom, ...]) -> None:
        self._rooms = tuple(rooms)
        self._notify_observers(StateEvent.ROOMS_LOADED, {"rooms": self._rooms})

    def set_selected_room(self, room: Optional[schemas.ChatRoom]) -> None:
        old_room = self._selected_room
        self._selected_room = room
        self._notify_observers(
            StateEvent.ROOM_SELECTED, {"old_room": old_room, "new_room": room}
        )
        self.logger.info(
            f"Selected room changed from {old_room.id if old_room else None} "
            f"to {room.id if room else None}"
        )

    def set_messages(self, messages: Tuple[schemas.ChatMessage, ...]) -> None:
        if messages is self._messages:
            return
        self._messages = tuple(messages)
        self._notify_observers(
            StateEvent.MESSAGES_CHANGED, {"messages": self._messages}
        )

    def set_files(self, files: Tuple[schemas.SharedFile, ...]) -> None:
        if files is self._files:
            return
        self._files = tuple(files)
        self._notify_observers(StateEvent.FILES_CHANGED, {"files": self._files})

    def set_error(self, message: Optional[str]) -> None:
        self._last_error = message
        if message:
            self._notify_observers(StateEvent.ERROR_RAISED, {"error": message})
