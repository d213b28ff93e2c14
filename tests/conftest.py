"""Shared pytest fixtures for media-library tests."""

from __future__ import annotations

from typing import Any

import pytest
from starlette.requests import Request

from media_library.catalog import Document, InMemoryCatalog, Patron
from media_library.context import RequestContext
from media_library.session import InMemorySessionStore


@pytest.fixture
def make_request() -> Any:
    """Factory for creating mock Starlette Request objects."""

    def _make(
        method: str = "GET",
        path: str = "/document",
        headers: dict[str, str] | None = None,
        query_string: str = "",
    ) -> Request:
        scope: dict[str, Any] = {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": query_string.encode(),
            "headers": [
                (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
            ],
            "root_path": "",
        }
        return Request(scope)

    return _make


@pytest.fixture
def make_ctx(make_request: Any) -> Any:
    """Factory for RequestContext objects with explicit parameters."""

    def _make(method: str = "GET", **params: str) -> RequestContext:
        return RequestContext(request=make_request(method=method), params=params)

    return _make


@pytest.fixture
def alice() -> Patron:
    return Patron(id=1, name="Alice")


@pytest.fixture
def bob() -> Patron:
    return Patron(id=2, name="Bob")


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Catalog seeded with two books and a DVD."""
    return InMemoryCatalog(
        [
            Document(id=1, title="Les Misérables", author="Victor Hugo"),
            Document(id=2, title="Germinal", author="Émile Zola"),
            Document(id=3, title="Amélie", author="Jean-Pierre Jeunet", kind="dvd"),
        ]
    )


@pytest.fixture
def sessions() -> InMemorySessionStore:
    return InMemorySessionStore()
