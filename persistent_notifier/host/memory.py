"""In-memory host application.

A small, fully synchronous stand-in for a modeling host: documents with a
selection and a page list, entities that can be selected, and a lifecycle bus
announcing document creation, opening, activation and closing.

It behaves the way the notifier expects a real host to behave:

- attaching the same observer twice to a live subject is a no-op;
- closing a document invalidates it together with its selection and pages,
  and any later attach/detach on them raises InvalidSubjectError;
- in single-document mode a new or opened document replaces the current one,
  while in multi-document mode several documents stay open side by side and
  the user switches between them with `activate`.
"""

import logging
from typing import Any, Iterator, List, Optional

from ..bus import EventBus
from ..events import DocumentActivated, DocumentClosed, DocumentCreated, DocumentOpened

logger = logging.getLogger(__name__)


class InvalidSubjectError(RuntimeError):
    """Raised when attaching to or detaching from a closed document's subject."""
    pass


class _ObservedSubject:
    """Observer bookkeeping shared by every attachable host object."""

    def __init__(self) -> None:
        self._observers: List[Any] = []

    def _check_valid(self) -> None:
        raise NotImplementedError

    def attach(self, observer: Any) -> bool:
        """Attach observer, returning False if it was already attached."""
        self._check_valid()
        if self.is_attached(observer):
            return False
        self._observers.append(observer)
        return True

    def detach(self, observer: Any) -> bool:
        """Detach observer, returning False if it was not attached."""
        self._check_valid()
        for index, attached in enumerate(self._observers):
            if attached is observer:
                del self._observers[index]
                return True
        return False

    def is_attached(self, observer: Any) -> bool:
        return any(attached is observer for attached in self._observers)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def _notify(self, callback: str, *args: Any) -> None:
        for observer in list(self._observers):
            method = getattr(observer, callback, None)
            if method is None:
                continue
            try:
                method(self, *args)
            except Exception as e:
                logger.error(
                    f"Observer {type(observer).__name__}.{callback} raised: {e}",
                    exc_info=True
                )


class Entity:
    """A drawable element of a document."""

    def __init__(self, document: "Document", name: str) -> None:
        self.document = document
        self.name = name
        self._erased = False

    def is_valid(self) -> bool:
        return not self._erased and self.document.is_valid()

    def erase(self) -> None:
        if self in self.document.selection:
            self.document.selection.remove(self)
        self._erased = True
        self.document.entities.remove(self)

    def __repr__(self) -> str:
        return f"Entity({self.name!r})"


class Page:
    """A named scene in a document's page list."""

    def __init__(self, pages: "Pages", name: str) -> None:
        self.pages = pages
        self.name = name

    def __repr__(self) -> str:
        return f"Page({self.name!r})"


class Selection(_ObservedSubject):
    """The set of entities currently selected in a document.

    Selections cannot be queried for validity directly; they are only as valid
    as the document they belong to.
    """

    def __init__(self, document: "Document") -> None:
        super().__init__()
        self.document = document
        self._entities: List[Entity] = []

    def _check_valid(self) -> None:
        if not self.document.is_valid():
            raise InvalidSubjectError("reference to closed Selection")

    def add(self, *entities: Entity) -> int:
        """Select entities, returning how many were newly selected."""
        added = [e for e in entities if e not in self._entities]
        self._entities.extend(added)
        if len(added) == 1:
            self._notify("on_selection_added", added[0])
        elif added:
            self._notify("on_selection_bulk_change")
        return len(added)

    def remove(self, *entities: Entity) -> int:
        """Deselect entities, returning how many were deselected."""
        removed = [e for e in entities if e in self._entities]
        for entity in removed:
            self._entities.remove(entity)
        if len(removed) == 1:
            self._notify("on_selection_removed", removed[0])
        elif removed:
            self._notify("on_selection_bulk_change")
        return len(removed)

    def toggle(self, *entities: Entity) -> None:
        if not entities:
            return
        for entity in entities:
            if entity in self._entities:
                self._entities.remove(entity)
            else:
                self._entities.append(entity)
        self._notify("on_selection_bulk_change")

    def clear(self) -> None:
        if not self._entities:
            return
        self._entities.clear()
        self._notify("on_selection_cleared")

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    def __len__(self) -> int:
        return len(self._entities)


class Pages(_ObservedSubject):
    """A document's ordered list of pages (scenes)."""

    def __init__(self, document: "Document") -> None:
        super().__init__()
        self.document = document
        self._pages: List[Page] = []
        self._selected: Optional[Page] = None

    def _check_valid(self) -> None:
        if not self.document.is_valid():
            raise InvalidSubjectError("reference to closed Pages")

    def add(self, name: str) -> Page:
        page = Page(self, name)
        self._pages.append(page)
        self._notify("on_page_added", page)
        return page

    def erase(self, page: Page) -> None:
        self._pages.remove(page)
        if self._selected is page:
            self._selected = None
        self._notify("on_page_removed", page)

    @property
    def selected_page(self) -> Optional[Page]:
        return self._selected

    @selected_page.setter
    def selected_page(self, page: Page) -> None:
        if page not in self._pages:
            raise ValueError(f"{page!r} does not belong to this document")
        previous, self._selected = self._selected, page
        if previous is not page:
            self._notify("on_page_selected", previous, page)

    def __iter__(self) -> Iterator[Page]:
        return iter(list(self._pages))

    def __len__(self) -> int:
        return len(self._pages)


class Document(_ObservedSubject):
    """An editable document with its own selection and page list."""

    def __init__(self, host: "MemoryHost", title: str) -> None:
        super().__init__()
        self.host = host
        self.title = title
        self.entities: List[Entity] = []
        self._open = True
        self._selection = Selection(self)
        self._pages = Pages(self)

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def pages(self) -> Pages:
        return self._pages

    def is_valid(self) -> bool:
        return self._open

    def _check_valid(self) -> None:
        if not self._open:
            raise InvalidSubjectError(f"reference to closed document {self.title!r}")

    def add_entity(self, name: str = "cpoint") -> Entity:
        self._check_valid()
        entity = Entity(self, name)
        self.entities.append(entity)
        return entity

    def save(self) -> None:
        self._check_valid()
        self._notify("on_save")

    def _close(self) -> None:
        self._notify("on_close")
        self._open = False

    def __repr__(self) -> str:
        state = "open" if self._open else "closed"
        return f"Document({self.title!r}, {state})"


class MemoryHost:
    """Host application holding documents in memory.

    Args:
        multi_document: Keep several documents open at once. When False,
            creating or opening a document closes the current one first.
        startup_document: Create an initial untitled document, as hosts do
            at launch.
    """

    def __init__(self, multi_document: bool = True, startup_document: bool = True) -> None:
        self.bus = EventBus()
        self.multi_document = multi_document
        self.documents: List[Document] = []
        self._active: Optional[Document] = None
        self._untitled = 0
        if startup_document:
            self.new_document()

    @property
    def active_document(self) -> Optional[Document]:
        return self._active

    def new_document(self, title: Optional[str] = None) -> Document:
        """Create an empty document, make it active and emit DocumentCreated."""
        if title is None:
            self._untitled += 1
            title = f"Untitled {self._untitled}"
        document = self._add_document(title)
        self.bus.emit(DocumentCreated(document=document))
        return document

    def open_document(self, title: str) -> Document:
        """Open a document, make it active and emit DocumentOpened."""
        document = self._add_document(title)
        self.bus.emit(DocumentOpened(document=document))
        return document

    def activate(self, document: Document) -> None:
        """Switch to an open document, emitting DocumentActivated."""
        if document not in self.documents:
            raise ValueError(f"{document!r} is not open in this host")
        if document is self._active:
            return
        self._active = document
        logger.debug(f"Activated {document!r}")
        self.bus.emit(DocumentActivated(document=document))

    def close_document(self, document: Document) -> None:
        """Close a document, invalidating it and its selection and pages.

        If the closed document was active, the most recently added remaining
        document is activated.
        """
        if document not in self.documents:
            raise ValueError(f"{document!r} is not open in this host")
        self.documents.remove(document)
        document._close()
        logger.debug(f"Closed {document!r}")
        self.bus.emit(DocumentClosed(document=document))
        if document is self._active:
            self._active = None
            if self.documents:
                self.activate(self.documents[-1])

    def _add_document(self, title: str) -> Document:
        if not self.multi_document and self._active is not None:
            self.close_document(self._active)
        document = Document(self, title)
        self.documents.append(document)
        self._active = document
        logger.debug(f"Added {document!r}")
        return document
