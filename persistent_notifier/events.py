"""Document lifecycle notifications published on the host event bus.

Notifications are frozen dataclasses describing what happened to a document.
The host emits one of them each time a document is created, opened from
storage, activated (switched to in a multi-document host) or closed.

Every notification carries the document it concerns. Creation, opening and
activation all hand out a document whose selection and pages may be brand-new
objects, which is why persistent observers are re-attached on each of them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Type


@dataclass(frozen=True)
class DocumentCreated:
    """Emitted when the host creates a new, empty document.

    Attributes:
        document: The newly created document
        timestamp: When the document was created
    """
    document: Any
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class DocumentOpened:
    """Emitted when the host opens an existing document.

    Attributes:
        document: The opened document
        timestamp: When the document was opened
    """
    document: Any
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class DocumentActivated:
    """Emitted when the user switches to another open document.

    Attributes:
        document: The document that became active
        timestamp: When the switch happened
    """
    document: Any
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class DocumentClosed:
    """Emitted after a document has been closed and invalidated.

    Attributes:
        document: The closed (no longer valid) document
        timestamp: When the document was closed
    """
    document: Any
    timestamp: datetime = field(default_factory=datetime.now)


# Notifications that hand out a document observers may need re-attaching to,
# keyed by the names used in configuration files.
LIFECYCLE_EVENTS: Dict[str, Type] = {
    "created": DocumentCreated,
    "opened": DocumentOpened,
    "activated": DocumentActivated,
}
