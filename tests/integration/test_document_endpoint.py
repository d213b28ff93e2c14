"""Integration tests for /document through FastAPI."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from media_library.app import create_app
from media_library.catalog import InMemoryCatalog, Patron
from media_library.config import Settings
from media_library.context import RequestContext
from media_library.services.document import BORROW_SUCCESS
from media_library.session import InMemorySessionStore


def _app(
    catalog: InMemoryCatalog,
    sessions: InMemorySessionStore,
    **settings: Any,
) -> FastAPI:
    return create_app(Settings(**settings), catalog=catalog, sessions=sessions)


def _client(app: FastAPI, session_id: str | None = None) -> AsyncClient:
    cookies = {"session": session_id} if session_id else None
    return AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test", cookies=cookies
    )


def _login(sessions: InMemorySessionStore, patron: Patron) -> str:
    session = sessions.get_or_create(None)
    session.attach_identity(patron)
    return session.session_id


class TestViewDocument:
    @pytest.mark.parametrize("doc_id", [1, 2, 3])
    async def test_existing_document_renders(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore, doc_id: int
    ) -> None:
        async with _client(_app(catalog, sessions)) as client:
            resp = await client.get("/document", params={"id": doc_id})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert f'<article data-id="{doc_id}">' in resp.text
        assert resp.text.index("<header>") < resp.text.index("<article")
        assert resp.text.index("<article") < resp.text.index("<footer>")

    @pytest.mark.parametrize("raw", ["999", "-1", "abc", "1.5", ""])
    async def test_unknown_or_invalid_id_is_404(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore, raw: str
    ) -> None:
        async with _client(_app(catalog, sessions)) as client:
            resp = await client.get("/document", params={"id": raw})
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Document not found."}

    async def test_missing_id_redirects_to_root_only(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore
    ) -> None:
        async with _client(_app(catalog, sessions)) as client:
            resp = await client.get("/document")
        assert resp.status_code == 303
        assert resp.headers["location"] == "/"
        assert resp.text == ""

    async def test_new_session_sets_cookie(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore
    ) -> None:
        async with _client(_app(catalog, sessions)) as client:
            first = await client.get("/document", params={"id": 1})
            second = await client.get("/document", params={"id": 1})
        assert "session" in first.cookies
        assert "set-cookie" not in second.headers
        assert len(sessions) == 1


class TestBorrowDocument:
    async def test_borrow_then_view_reflects_loan(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore, alice: Patron
    ) -> None:
        app = _app(catalog, sessions)
        async with _client(app, _login(sessions, alice)) as client:
            posted = await client.post(
                "/document", params={"id": 2}, data={"emprunter": "1"}
            )
            viewed = await client.get("/document", params={"id": 2})
        assert posted.status_code == 200
        assert BORROW_SUCCESS in posted.text
        assert "On loan" in posted.text
        assert "On loan" in viewed.text
        assert catalog.loans() == {2: alice}

    async def test_id_in_form_body(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore, alice: Patron
    ) -> None:
        async with _client(_app(catalog, sessions), _login(sessions, alice)) as client:
            resp = await client.post("/document", data={"id": "3", "emprunter": "x"})
        assert resp.status_code == 200
        assert catalog.loans() == {3: alice}

    async def test_post_without_action_renders_like_get(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore, alice: Patron
    ) -> None:
        async with _client(_app(catalog, sessions), _login(sessions, alice)) as client:
            posted = await client.post("/document", params={"id": 1}, data={})
            viewed = await client.get("/document", params={"id": 1})
        assert posted.status_code == 200
        assert posted.text == viewed.text
        assert catalog.loans() == {}

    async def test_second_borrow_shows_domain_message(
        self,
        catalog: InMemoryCatalog,
        sessions: InMemorySessionStore,
        alice: Patron,
        bob: Patron,
    ) -> None:
        app = _app(catalog, sessions)
        async with _client(app, _login(sessions, alice)) as client:
            await client.post("/document", params={"id": 1}, data={"emprunter": "1"})
        async with _client(app, _login(sessions, bob)) as client:
            resp = await client.post(
                "/document", params={"id": 1}, data={"emprunter": "1"}
            )
        assert resp.status_code == 200
        assert "This document is already on loan." in resp.text
        assert catalog.loans() == {1: alice}

    async def test_two_sessions_borrowing_same_document_lend_once(
        self,
        catalog: InMemoryCatalog,
        sessions: InMemorySessionStore,
        alice: Patron,
        bob: Patron,
    ) -> None:
        app = _app(catalog, sessions)

        async def borrow(patron: Patron) -> str:
            async with _client(app, _login(sessions, patron)) as client:
                resp = await client.post(
                    "/document", params={"id": 1}, data={"emprunter": "1"}
                )
            assert resp.status_code == 200
            return resp.text

        pages = await asyncio.gather(borrow(alice), borrow(bob))
        successes = [page for page in pages if BORROW_SUCCESS in page]
        refusals = [page for page in pages if "already on loan" in page]
        assert len(successes) == 1
        assert len(refusals) == 1
        assert list(catalog.loans()) == [1]

    async def test_post_without_id_redirects(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore, alice: Patron
    ) -> None:
        async with _client(_app(catalog, sessions), _login(sessions, alice)) as client:
            resp = await client.post("/document", data={"emprunter": "1"})
        assert resp.status_code == 303
        assert resp.headers["location"] == "/"
        assert catalog.loans() == {}


class TestSubscriberGating:
    async def test_anonymous_is_redirected_to_login(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore
    ) -> None:
        app = _app(catalog, sessions, require_subscriber=True, login_path="/login")
        async with _client(app) as client:
            resp = await client.get("/document", params={"id": 1})
        assert resp.status_code == 303
        assert resp.headers["location"] == "/login"

    async def test_subscriber_sees_page(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore, alice: Patron
    ) -> None:
        app = _app(catalog, sessions, require_subscriber=True)
        async with _client(app, _login(sessions, alice)) as client:
            resp = await client.get("/document", params={"id": 1})
        assert resp.status_code == 200


class TestFaults:
    async def test_rendering_failure_is_500(
        self, catalog: InMemoryCatalog, sessions: InMemorySessionStore
    ) -> None:
        class _BrokenRenderer:
            def render(self, fragment: str, ctx: RequestContext) -> str:
                raise RuntimeError("template exploded")

        app = create_app(
            Settings(), catalog=catalog, sessions=sessions, renderer=_BrokenRenderer()
        )
        async with _client(app) as client:
            resp = await client.get("/document", params={"id": 1})
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Internal pipeline error"}
        assert catalog.loans() == {}
