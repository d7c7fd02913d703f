"""Exception classes for persistent observer errors.

This module defines the exception hierarchy used throughout the package.
The base PersistentNotifierError class lets callers catch every
package-specific error with a single handler, while the subclasses also
derive from the builtin exception matching their failure mode.
"""


class PersistentNotifierError(Exception):
    """Base exception for persistent notifier errors."""
    pass


class InvalidObserverKind(PersistentNotifierError, TypeError):
    """Raised when an observer is not an instance of a supported kind.

    Only document, selection and pages observers can be made persistent.
    Observers of objects that can recur within a document (entities,
    entity collections) have no single subject to re-attach to, and
    application-level observers are already persistent in the host.
    """

    def __init__(self, observer: object) -> None:
        self.observer = observer
        super().__init__(
            f"Unsupported observer type {type(observer).__name__}: expected a "
            f"DocumentObserver, SelectionObserver or PagesObserver"
        )


class NotRegistered(PersistentNotifierError, KeyError):
    """Raised when removing an observer that has not been added.

    Removal is deliberately strict: removing the same observer twice usually
    means two owners disagree about its lifetime.
    """

    def __init__(self, observer: object) -> None:
        self.observer = observer
        super().__init__(f"Observer not attached: {observer!r}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0])


class ConfigError(PersistentNotifierError):
    """Raised when configuration file operations fail."""
    pass


__all__ = [
    'PersistentNotifierError',
    'InvalidObserverKind',
    'NotRegistered',
    'ConfigError',
]
