"""Observer kinds that can be made persistent.

Each kind pairs a host observer base class with the rule for finding, in a
given document, the subject an observer of that class attaches to. The set of
kinds is closed: anything that is not an instance of one of these base classes
has no well-defined subject and is rejected.
"""

from dataclasses import dataclass
from typing import Any, Callable, Tuple

from .errors import InvalidObserverKind
from .host import DocumentObserver, PagesObserver, SelectionObserver


@dataclass(frozen=True)
class ObserverKind:
    """A supported observer kind.

    Attributes:
        name: Short name used in log messages
        base: Host observer class instances of this kind derive from
        resolve: Returns the subject for this kind within a document
    """
    name: str
    base: type
    resolve: Callable[[Any], Any]

    def matches(self, observer: object) -> bool:
        return isinstance(observer, self.base)


DOCUMENT = ObserverKind("document", DocumentObserver, lambda document: document)
SELECTION = ObserverKind("selection", SelectionObserver, lambda document: document.selection)
PAGES = ObserverKind("pages", PagesObserver, lambda document: document.pages)

SUPPORTED_KINDS: Tuple[ObserverKind, ...] = (DOCUMENT, SELECTION, PAGES)


def kind_of(observer: object) -> ObserverKind:
    """Return the kind of observer.

    Raises:
        InvalidObserverKind: If observer matches no supported kind
    """
    for kind in SUPPORTED_KINDS:
        if kind.matches(observer):
            return kind
    raise InvalidObserverKind(observer)


def resolve_subject(document: Any, observer: object) -> Any:
    """Return the subject in document that observer should be attached to."""
    return kind_of(observer).resolve(document)
