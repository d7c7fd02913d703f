"""Lifecycle listener keeping persistent observers attached.

Subscribes to the host's document lifecycle notifications and, for each
document handed out, drops subjects of closed documents from the registry and
re-attaches every registered observer to the new document's subjects.
"""

import logging
from typing import Any, Iterable, List, Type

from .bus import EventBus
from .events import LIFECYCLE_EVENTS
from .registry import ObserverRegistry

logger = logging.getLogger(__name__)


class LifecycleListener:
    """Observer of host lifecycle notifications for one registry.

    Subscribes on construction; `close()` unsubscribes. Notifications for
    documents while no observers are registered are harmless no-ops.

    Args:
        bus: Host event bus to subscribe to
        registry: Registry whose observers are re-attached
        events: Names of the notifications to react to, a subset of
            "created", "opened" and "activated"
    """

    def __init__(
        self,
        bus: EventBus,
        registry: ObserverRegistry,
        events: Iterable[str] = tuple(LIFECYCLE_EVENTS),
    ) -> None:
        self._bus = bus
        self._registry = registry
        self._event_types: List[Type] = [LIFECYCLE_EVENTS[name] for name in events]
        self._subscribe()

    def _subscribe(self) -> None:
        for event_type in self._event_types:
            self._bus.on(event_type, self._on_lifecycle_event)

    def _unsubscribe(self) -> None:
        for event_type in self._event_types:
            self._bus.off(event_type, self._on_lifecycle_event)

    def close(self) -> None:
        self._unsubscribe()

    def on_document_init(self, document: Any) -> None:
        """Bring the registry up to date for a newly handed out document."""
        self._registry.purge_invalid_subjects()
        self._registry.register_observers(document)

    def _on_lifecycle_event(self, event: Any) -> None:
        logger.debug(f"{type(event).__name__}: {event.document!r}")
        self.on_document_init(event.document)
