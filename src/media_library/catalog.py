"""Shared catalog — Document, Patron, CatalogStore, InMemoryCatalog."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from media_library.exceptions import BorrowError


@dataclass(frozen=True)
class Patron:
    """Authenticated library user attached to a session."""

    id: int
    name: str
    subscriber: bool = True


@dataclass
class Document:
    """Catalog entry. Loan state is only changed through the catalog."""

    id: int
    title: str
    author: str = ""
    kind: str = "book"
    borrower: Patron | None = None

    @property
    def available(self) -> bool:
        return self.borrower is None

    def metadata(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "kind": self.kind,
            "available": self.available,
        }


@runtime_checkable
class CatalogStore(Protocol):
    """Narrow contract the pipeline consumes.

    ``lookup`` and ``borrow`` must only be called while holding
    ``critical_section()``.
    """

    def critical_section(self) -> AbstractContextManager[Any]: ...
    def lookup(self, document_id: int) -> Document | None: ...
    def borrow(self, document: Document, identity: Patron | None) -> None: ...


class InMemoryCatalog:
    """Default catalog holding documents in a dict.

    Every service sharing an instance serializes on the same lock, so lookups
    and borrows are totally ordered across all requests.
    """

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self._documents: dict[int, Document] = {doc.id: doc for doc in documents}
        self._lock = threading.Lock()

    def critical_section(self) -> AbstractContextManager[Any]:
        return self._lock

    def add(self, document: Document) -> None:
        with self._lock:
            self._documents[document.id] = document

    def lookup(self, document_id: int) -> Document | None:
        return self._documents.get(document_id)

    def borrow(self, document: Document, identity: Patron | None) -> None:
        if identity is None:
            raise BorrowError("You must be signed in to borrow a document.")
        current = self._documents.get(document.id)
        if current is None:
            raise BorrowError("This document is no longer in the catalog.")
        if current.borrower is not None:
            if current.borrower == identity:
                raise BorrowError("You have already borrowed this document.")
            raise BorrowError("This document is already on loan.")
        if not identity.subscriber:
            raise BorrowError("Only subscribers can borrow documents.")
        current.borrower = identity

    def loans(self) -> dict[int, Patron]:
        with self._lock:
            return {
                doc_id: doc.borrower
                for doc_id, doc in self._documents.items()
                if doc.borrower is not None
            }
