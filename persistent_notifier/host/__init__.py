"""Host application contract.

This package describes the collaborator the persistent notifier runs against:
the observer base classes client code subclasses, and structural protocols for
the documents, subjects and lifecycle subscription point the host provides.

Subjects are assumed to de-duplicate attachment: attaching an observer that is
already attached to the same live subject must not make its callbacks fire
twice. The notifier relies on this when it re-attaches every registered
observer on each lifecycle event, but has no way to verify it.

The in-memory implementation in `persistent_notifier.host.memory` satisfies
this contract and is what the test suite runs against.
"""

from typing import Any, Callable, Optional, Protocol, Type, runtime_checkable


class DocumentObserver:
    """Base class for observers attached to a document."""

    def on_save(self, document: Any) -> None:
        pass

    def on_close(self, document: Any) -> None:
        pass


class SelectionObserver:
    """Base class for observers attached to a document's selection."""

    def on_selection_added(self, selection: Any, entity: Any) -> None:
        pass

    def on_selection_removed(self, selection: Any, entity: Any) -> None:
        pass

    def on_selection_cleared(self, selection: Any) -> None:
        pass

    def on_selection_bulk_change(self, selection: Any) -> None:
        pass


class PagesObserver:
    """Base class for observers attached to a document's page list."""

    def on_page_added(self, pages: Any, page: Any) -> None:
        pass

    def on_page_removed(self, pages: Any, page: Any) -> None:
        pass

    def on_page_selected(self, pages: Any, from_page: Any, to_page: Any) -> None:
        pass


@runtime_checkable
class Subject(Protocol):
    """Anything an observer can be attached to.

    `attach` must be idempotent per observer for a live subject and `detach`
    must tolerate observers that are not attached.
    """

    def attach(self, observer: Any) -> bool: ...

    def detach(self, observer: Any) -> bool: ...


@runtime_checkable
class Document(Subject, Protocol):
    """A host document and the per-document subjects hanging off it."""

    @property
    def selection(self) -> Subject: ...

    @property
    def pages(self) -> Subject: ...

    def is_valid(self) -> bool: ...


class EventSource(Protocol):
    """The host's global subscription point for lifecycle notifications."""

    def on(self, event_type: Type, handler: Callable[[Any], None]) -> None: ...

    def off(self, event_type: Type, handler: Callable[[Any], None]) -> None: ...


class Host(Protocol):
    """The host application as seen by the notifier."""

    bus: EventSource

    @property
    def active_document(self) -> Optional[Document]: ...


__all__ = [
    "Document",
    "DocumentObserver",
    "EventSource",
    "Host",
    "PagesObserver",
    "SelectionObserver",
    "Subject",
]
