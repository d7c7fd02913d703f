"""Notifier context binding a registry and lifecycle listener to a host.

A PersistentNotifier is the single owner of the persistent-observer state for
one host. Create it once when the plugin loads, call `install()` (idempotent)
to start listening for lifecycle notifications, and hand observers to
`add_observer` / `remove_observer`.

    notifier = PersistentNotifier(host, load_config())
    notifier.install()
    notifier.add_observer(inspector)
"""

import logging
from typing import Any, Dict, Optional

from .config import resolve_config
from .events import LIFECYCLE_EVENTS
from .lifecycle import LifecycleListener
from .registry import ObserverRegistry

logger = logging.getLogger(__name__)


class PersistentNotifier:
    """Persistent observer support for a single host.

    Args:
        host: Host application (see `persistent_notifier.host.Host`)
        config: Configuration, as returned by `load_config()` or built in
            code. It is validated here and missing keys take their defaults.

    Raises:
        ConfigError: If a config value has the wrong type
    """

    def __init__(self, host: Any, config: Optional[Dict[str, Any]] = None) -> None:
        self._host = host
        self._config = resolve_config(config)
        self.registry = ObserverRegistry(host, strict_remove=self._config["strict_remove"])
        self._listener: Optional[LifecycleListener] = None

    @property
    def installed(self) -> bool:
        return self._listener is not None

    def install(self) -> None:
        """Subscribe to the host's lifecycle notifications.

        Calling it again while installed does nothing, so the listener is
        subscribed at most once however often the plugin is reloaded. With
        `startup_notifications` enabled the document already active at this
        point is handled as if it had just been activated.
        """
        if self._listener is not None:
            return
        self._listener = LifecycleListener(self._host.bus, self.registry)
        logger.info(f"Listening for document events: {', '.join(LIFECYCLE_EVENTS)}")
        document = self._host.active_document
        if self._config["startup_notifications"] and document is not None:
            self._listener.on_document_init(document)

    def close(self) -> None:
        """Stop listening for lifecycle notifications.

        Registered observers stay attached to their current subjects but will
        not follow further document changes until `install()` is called again.
        """
        if self._listener is None:
            return
        self._listener.close()
        self._listener = None
        logger.info("Stopped listening for document events")

    def add_observer(self, observer: Any) -> None:
        """Add an observer that persists between documents.

        See `ObserverRegistry.add_observer`.
        """
        self.registry.add_observer(observer)

    def remove_observer(self, observer: Any) -> None:
        """Remove a persistent observer.

        See `ObserverRegistry.remove_observer`.
        """
        self.registry.remove_observer(observer)

    def reset(self) -> None:
        """Detach and forget every observer, keeping the listener installed."""
        self.registry.reset()
