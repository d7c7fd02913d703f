"""Registry of persistent observers.

The registry remembers every observer added through it together with the
subjects (documents, selections, page lists) it has been attached to. When the
host hands out a new document, `register_observers` attaches every known
observer to the matching subject of that document, so callers add an observer
once instead of re-adding it on every document switch.

Observers and subjects are tracked by identity. Two observers that compare
equal are still two registrations, and a subject is recorded once no matter
how often the observer is attached to it.

Attachment relies on the host ignoring a repeated attach of the same observer
to the same live subject. `register_observers` attaches unconditionally rather
than skipping subjects it has already recorded, because some hosts hand back a
fresh selection or page list object for a document the registry has seen
before, and the only safe way not to miss it is to always attach.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Tuple

from .errors import NotRegistered
from .kinds import ObserverKind, kind_of

logger = logging.getLogger(__name__)


def subject_is_valid(subject: Any) -> bool:
    """Check whether a subject still exists in the host.

    Subjects that can be asked directly (documents, entities) answer through
    `is_valid()`. Subjects that only know their owning document (selections,
    page lists) are valid while that document is.
    """
    is_valid = getattr(subject, "is_valid", None)
    if callable(is_valid):
        return bool(is_valid())
    document = getattr(subject, "document", None)
    if document is not None:
        return bool(document.is_valid())
    return False


@dataclass
class _Entry:
    observer: Any
    kind: ObserverKind
    # Keyed by id(); holding the subject keeps the id from being reused.
    subjects: Dict[int, Any] = field(default_factory=dict)

    def record(self, subject: Any) -> None:
        self.subjects[id(subject)] = subject


class ObserverRegistry:
    """Observers registered for persistence and the subjects they observe.

    Args:
        host: Host application providing `active_document`
        strict_remove: Raise NotRegistered when removing an unknown observer.
            When False, such removals are logged and ignored.
    """

    def __init__(self, host: Any, strict_remove: bool = True) -> None:
        self._host = host
        self.strict_remove = strict_remove
        self._entries: Dict[int, _Entry] = {}

    def add_observer(self, observer: Any) -> None:
        """Add an observer and keep it attached across documents.

        The observer is attached to the matching subject of the active
        document right away and to that of every document created, opened or
        activated afterwards. Adding an observer that is already registered
        only re-attaches it, which the host treats as a no-op.

        Raises:
            InvalidObserverKind: If observer is not a document, selection or
                pages observer. The registry is left unchanged.
        """
        kind = kind_of(observer)
        if id(observer) not in self._entries:
            self._entries[id(observer)] = _Entry(observer=observer, kind=kind)
            logger.debug(f"Registered {kind.name} observer {observer!r}")

        document = self._host.active_document
        if document is None:
            logger.debug("No active document; attachment deferred to next lifecycle event")
            return
        self.register_observers(document)

    def remove_observer(self, observer: Any) -> None:
        """Detach an observer from all its subjects and forget it.

        Subjects whose document has since closed are skipped; the host would
        reject a detach on them.

        Raises:
            InvalidObserverKind: If observer is not a supported kind
            NotRegistered: If observer was never added or was already removed
                (unless strict_remove is False)
        """
        kind_of(observer)
        entry = self._entries.get(id(observer))
        if entry is None:
            if self.strict_remove:
                raise NotRegistered(observer)
            logger.warning(f"Ignoring removal of unregistered observer {observer!r}")
            return

        self._detach_all(entry)
        del self._entries[id(observer)]
        logger.debug(f"Removed {entry.kind.name} observer {observer!r}")

    def register_observers(self, document: Any) -> None:
        """Attach every registered observer to its subject in document."""
        for entry in self._entries.values():
            subject = entry.kind.resolve(document)
            subject.attach(entry.observer)
            entry.record(subject)
        if self._entries:
            logger.debug(f"Attached {len(self._entries)} observer(s) to {document!r}")

    def purge_invalid_subjects(self) -> int:
        """Forget subjects that no longer exist in the host.

        Returns:
            Number of subject references dropped
        """
        purged = 0
        for entry in self._entries.values():
            stale = [key for key, subject in entry.subjects.items()
                     if not subject_is_valid(subject)]
            for key in stale:
                del entry.subjects[key]
            purged += len(stale)
        if purged:
            logger.debug(f"Purged {purged} invalid subject(s)")
        return purged

    def reset(self) -> None:
        """Detach every observer and return to an empty registry."""
        for entry in self._entries.values():
            self._detach_all(entry)
        self._entries.clear()

    def is_registered(self, observer: Any) -> bool:
        return id(observer) in self._entries

    def subjects_for(self, observer: Any) -> Tuple[Any, ...]:
        """Return the subjects currently recorded for observer.

        Raises:
            NotRegistered: If observer is not registered
        """
        entry = self._entries.get(id(observer))
        if entry is None:
            raise NotRegistered(observer)
        return tuple(entry.subjects.values())

    def observers(self) -> Iterator[Any]:
        return iter([entry.observer for entry in self._entries.values()])

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _detach_all(entry: _Entry) -> None:
        for subject in entry.subjects.values():
            if subject_is_valid(subject):
                subject.detach(entry.observer)
