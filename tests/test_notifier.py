"""End-to-end tests for PersistentNotifier against the in-memory host."""

import logging

import pytest

from persistent_notifier import (
    ConfigError,
    InvalidObserverKind,
    NotRegistered,
    PersistentNotifier,
)
from persistent_notifier.events import DocumentActivated, DocumentCreated, DocumentOpened
from persistent_notifier.host.memory import MemoryHost


class FrameChangeObserver:
    """Already persistent in the host; not supported."""
    pass


class TestScenarios:
    """Typical plugin usage from add to remove."""

    def test_selection_observer_lifecycle(self, host, notifier, selection_observer, change_selection):
        """Count follows selection changes until the observer is removed."""
        notifier.add_observer(selection_observer)
        assert selection_observer.call_count == 0

        change_selection(host)
        assert selection_observer.call_count == 1

        notifier.remove_observer(selection_observer)
        change_selection(host)
        assert selection_observer.call_count == 1

        with pytest.raises(NotRegistered):
            notifier.remove_observer(selection_observer)

    def test_readd_after_removal(self, host, notifier, selection_observer, change_selection):
        notifier.add_observer(selection_observer)
        notifier.remove_observer(selection_observer)

        selection_observer.call_count = 0
        notifier.add_observer(selection_observer)
        notifier.add_observer(selection_observer)
        change_selection(host)

        assert selection_observer.call_count == 1

    def test_act_only_in_second_document(self, host, notifier, selection_observer, change_selection):
        """Cross-document persistence without double-firing from the first document."""
        notifier.add_observer(selection_observer)

        host.open_document("second.doc")
        change_selection(host)

        assert selection_observer.call_count == 1

    def test_unsupported_observers(self, notifier):
        with pytest.raises(InvalidObserverKind):
            notifier.add_observer(FrameChangeObserver())
        assert len(notifier.registry) == 0

    def test_document_observer_sees_close(self, host, notifier, document_observer):
        observer = document_observer
        notifier.add_observer(observer)
        first = host.active_document
        second = host.new_document()

        host.close_document(first)
        second.save()

        assert observer.closed == [first]
        assert observer.saved == [second]

    def test_faulty_observer_does_not_break_host(
        self, host, notifier, selection_observer, caplog, change_selection, make_selection_observer
    ):
        class FaultyObserver(make_selection_observer):
            def on_selection_added(self, selection, entity):
                raise RuntimeError("boom")

        notifier.add_observer(FaultyObserver())
        notifier.add_observer(selection_observer)

        with caplog.at_level(logging.ERROR):
            change_selection(host)

        assert selection_observer.call_count == 1
        assert "boom" in caplog.text


class TestInstall:

    def test_install_is_idempotent(self, host, change_selection, make_selection_observer):
        notifier = PersistentNotifier(host)
        notifier.install()
        notifier.install()
        observer = make_selection_observer()
        notifier.add_observer(observer)

        host.new_document()
        change_selection(host)

        assert observer.call_count == 1
        assert len(host.bus._handlers[DocumentCreated]) == 1
        notifier.close()

    def test_not_installed_does_not_follow_documents(self, host, selection_observer, change_selection):
        notifier = PersistentNotifier(host)
        notifier.add_observer(selection_observer)

        host.new_document()
        change_selection(host)

        assert not notifier.installed
        assert selection_observer.call_count == 0

    def test_close_stops_following(self, host, selection_observer, change_selection):
        notifier = PersistentNotifier(host)
        notifier.install()
        notifier.add_observer(selection_observer)
        notifier.close()

        host.new_document()
        change_selection(host)

        assert selection_observer.call_count == 0
        assert not host.bus._handlers.get(DocumentActivated)

    def test_close_when_not_installed(self, host):
        PersistentNotifier(host).close()

    def test_install_logs(self, host, caplog):
        notifier = PersistentNotifier(host)
        with caplog.at_level(logging.INFO, logger="persistent_notifier.notifier"):
            notifier.install()
        assert "created, opened, activated" in caplog.text
        notifier.close()


class TestConfiguration:

    def test_startup_notifications_handle_active_document(self, host, selection_observer, change_selection):
        """Observers registered before install are attached to the startup document."""
        notifier = PersistentNotifier(host)
        notifier.add_observer(selection_observer)
        replacement = type(host.active_document.selection)(host.active_document)
        host.active_document._selection = replacement

        notifier.install()
        change_selection(host)

        assert selection_observer.call_count == 1
        assert replacement in notifier.registry.subjects_for(selection_observer)
        notifier.close()

    def test_startup_notifications_disabled(self, host, selection_observer):
        notifier = PersistentNotifier(host, {"startup_notifications": False})
        notifier.add_observer(selection_observer)
        replacement = type(host.active_document.selection)(host.active_document)
        host.active_document._selection = replacement

        notifier.install()

        assert replacement not in notifier.registry.subjects_for(selection_observer)
        notifier.close()

    def test_startup_without_active_document(self, selection_observer, change_selection):
        host = MemoryHost(startup_document=False)
        notifier = PersistentNotifier(host)
        notifier.add_observer(selection_observer)

        notifier.install()
        host.new_document()
        change_selection(host)

        assert selection_observer.call_count == 1
        notifier.close()

    def test_follows_every_lifecycle_event(self, host, selection_observer, change_selection):
        """Re-attachment on created, opened and activated documents cannot be configured away."""
        notifier = PersistentNotifier(host, {"lifecycle_events": ["activated"]})
        notifier.install()
        notifier.add_observer(selection_observer)
        first = host.active_document

        host.new_document()
        change_selection(host)
        assert selection_observer.call_count == 1

        host.open_document("second.doc")
        change_selection(host)
        assert selection_observer.call_count == 2

        host.activate(first)
        change_selection(host)
        assert selection_observer.call_count == 3

        assert host.bus._handlers.get(DocumentCreated)
        assert host.bus._handlers.get(DocumentOpened)
        assert host.bus._handlers.get(DocumentActivated)
        notifier.close()

    @pytest.mark.parametrize("key", ["startup_notifications", "strict_remove"])
    def test_config_values_validated(self, host, key):
        """Config passed in code is type-checked like a config file."""
        with pytest.raises(ConfigError, match=f"'{key}' in notifier config"):
            PersistentNotifier(host, {key: "no"})

    def test_lenient_remove(self, host, selection_observer, caplog):
        notifier = PersistentNotifier(host, {"strict_remove": False})
        notifier.add_observer(selection_observer)
        notifier.remove_observer(selection_observer)

        with caplog.at_level(logging.WARNING, logger="persistent_notifier.registry"):
            notifier.remove_observer(selection_observer)

        assert "Ignoring removal of unregistered observer" in caplog.text
        assert not notifier.registry.is_registered(selection_observer)

    def test_reset_keeps_listener(self, host, notifier, selection_observer, change_selection):
        notifier.add_observer(selection_observer)
        notifier.reset()

        assert notifier.installed
        assert len(notifier.registry) == 0
        host.new_document()
        change_selection(host)
        assert selection_observer.call_count == 0
