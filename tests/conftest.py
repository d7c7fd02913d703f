# Test configuration for pytest
#
# Note: Tests require the package to be installed.
# Run `pip install -e .[test]` from the project root before running tests.
# This installs the package in development mode, allowing proper imports.

import pytest

from persistent_notifier import PersistentNotifier
from persistent_notifier.host import DocumentObserver, PagesObserver, SelectionObserver
from persistent_notifier.host.memory import MemoryHost


class CountingSelectionObserver(SelectionObserver):
    """Selection observer counting every selection callback."""

    def __init__(self):
        self.call_count = 0

    def on_selection_added(self, selection, entity):
        self.call_count += 1

    def on_selection_removed(self, selection, entity):
        self.call_count += 1

    def on_selection_cleared(self, selection):
        self.call_count += 1

    def on_selection_bulk_change(self, selection):
        self.call_count += 1


class RecordingDocumentObserver(DocumentObserver):
    def __init__(self):
        self.saved = []
        self.closed = []

    def on_save(self, document):
        self.saved.append(document)

    def on_close(self, document):
        self.closed.append(document)


class RecordingPagesObserver(PagesObserver):
    def __init__(self):
        self.added = []

    def on_page_added(self, pages, page):
        self.added.append(page)


@pytest.fixture
def host():
    """Multi-document host with one untitled document open."""
    return MemoryHost()


@pytest.fixture
def single_document_host():
    """Host that keeps only one document open at a time."""
    return MemoryHost(multi_document=False)


@pytest.fixture
def notifier(host):
    """Installed notifier, reset after the test."""
    notifier = PersistentNotifier(host)
    notifier.install()
    yield notifier
    notifier.reset()
    notifier.close()


@pytest.fixture
def make_selection_observer():
    """Factory for selection observers exposing a call_count."""
    return CountingSelectionObserver


@pytest.fixture
def selection_observer(make_selection_observer):
    return make_selection_observer()


@pytest.fixture
def document_observer():
    """Document observer recording saved and closed documents."""
    return RecordingDocumentObserver()


@pytest.fixture
def pages_observer():
    """Pages observer recording added pages."""
    return RecordingPagesObserver()


@pytest.fixture
def change_selection():
    """Return a function selecting a new construction point in the active document."""
    def change(host):
        document = host.active_document
        document.selection.add(document.add_entity())
    return change
