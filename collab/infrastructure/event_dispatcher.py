# collab/infrastructure/event_dispatcher.py
from collections import defaultdict
from collections.abc import Awaitable, Callable

from collab.domain.events import Event

EventHandler = Callable[[Event], Awaitable[None]]


class EventDispatcher:
    def __init__(self) -> None:
        self.handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def register(self, event_type: type[Event], handler: EventHandler) -> None:
        self.handlers[event_type.__name__].append(handler)

    def unregister(self, event_type: type[Event], handler: EventHandler) -> None:
        if handler in self.handlers[event_type.__name__]:
            self.handlers[event_type.__name__].remove(handler)

    async def dispatch(self, event: Event) -> None:
        for handler in list(self.handlers[type(event).__name__]):
            await handler(event)
