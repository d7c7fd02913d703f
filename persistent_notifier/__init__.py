"""Persistent observers for document-based host applications.

Observers added through a PersistentNotifier are re-attached to the matching
subject (document, selection or page list) every time the host creates, opens
or switches to a document, and detached from every subject they observe when
removed.
"""

from .config import load_config
from .errors import ConfigError, InvalidObserverKind, NotRegistered, PersistentNotifierError
from .host import DocumentObserver, PagesObserver, SelectionObserver
from .lifecycle import LifecycleListener
from .notifier import PersistentNotifier
from .registry import ObserverRegistry

__all__ = [
    "ConfigError",
    "DocumentObserver",
    "InvalidObserverKind",
    "LifecycleListener",
    "NotRegistered",
    "ObserverRegistry",
    "PagesObserver",
    "PersistentNotifier",
    "PersistentNotifierError",
    "SelectionObserver",
    "load_config",
]
