"""Event bus used by the host to publish document lifecycle notifications.

This module provides the synchronous publish/subscribe system through which a
host announces that a document was created, opened, activated or closed.
Subscribers such as the lifecycle listener register a handler per
notification type and are called inline, in subscription order.

Handler exceptions are caught and logged so that a failing subscriber cannot
stop the notification from reaching the others or break the host call that
emitted it.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Type, TypeVar

logger = logging.getLogger(__name__)

# Type variable for event types
E = TypeVar('E')

# Type alias for event handlers
EventHandler = Callable[[Any], None]


class EventBus:
    """Synchronous event bus keyed by event class.

    Dispatch matches the exact class of the emitted event; subclasses of a
    subscribed class are not delivered to its handlers.

    Example usage:
        bus = EventBus()

        def on_opened(event: DocumentOpened):
            print(f"Opened {event.document.title}")

        bus.on(DocumentOpened, on_opened)
        bus.emit(DocumentOpened(document=document))
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type, List[EventHandler]] = defaultdict(list)

    def on(self, event_type: Type[E], handler: Callable[[E], None]) -> None:
        """Subscribe a handler to an event type.

        Subscribing the same handler twice makes it fire twice per event.

        Args:
            event_type: The event class to subscribe to
            handler: Callable accepting the event instance
        """
        self._handlers[event_type].append(handler)

    def off(self, event_type: Type[E], handler: Callable[[E], None]) -> None:
        """Unsubscribe a handler from an event type.

        If the handler is not currently subscribed, this is a no-op.
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, event: Any) -> None:
        """Dispatch an event to every handler subscribed to its type.

        Handlers run against a snapshot of the subscription list, so a handler
        may subscribe or unsubscribe without affecting the current dispatch.

        Args:
            event: The event instance to dispatch
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                name = getattr(handler, '__qualname__', repr(handler))
                logger.error(
                    f"Event handler {name} raised exception for "
                    f"{event_type.__name__}: {e}",
                    exc_info=True
                )
