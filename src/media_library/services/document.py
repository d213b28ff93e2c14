"""DocumentService — shows one document and handles the borrow action."""

from __future__ import annotations

import logging

from media_library._types import AcceptanceGate
from media_library.catalog import CatalogStore, Document
from media_library.context import (
    ACTION_TOKEN,
    DOCUMENT_METADATA,
    MESSAGE,
    REDIRECT_FLAG,
    RequestContext,
)
from media_library.exceptions import BorrowError, DocumentNotFound
from media_library.hooks import PageService
from media_library.resolution import (
    Found,
    InvalidInput,
    MissingIdentifier,
    NotFound,
    lookup_document,
)

logger = logging.getLogger(__name__)

PARAM_ID = "id"
BORROW_ACTION = "emprunter"

BORROW_SUCCESS = "Enjoy your loan!"
NOT_FOUND_DETAIL = "Document not found."


class DocumentService(PageService):
    """Page for ``/document?id=<int>``.

    A POST carrying the ``emprunter`` parameter borrows the document for the
    session's identity before the page is built. Resolution and borrow take
    the catalog lock separately, so the document can change hands in between;
    the catalog re-checks loan state inside ``borrow``.
    """

    fragment = "document"

    def __init__(
        self,
        catalog: CatalogStore,
        *,
        gate: AcceptanceGate | None = None,
        root_path: str = "/",
        login_path: str = "/login",
    ) -> None:
        super().__init__(gate=gate)
        self._catalog = catalog
        self._root_path = root_path
        self._login_path = login_path

    async def pre(self, ctx: RequestContext) -> None:
        ctx.attributes[ACTION_TOKEN] = BORROW_ACTION

    def _resolve_document(self, ctx: RequestContext) -> Document | None:
        """Return the requested document, or None.

        A missing identifier redirects to the application root; after that
        the response is committed and nothing else may be sent.
        """
        result = lookup_document(self._catalog, ctx.params.get(PARAM_ID))
        if isinstance(result, Found):
            return result.document
        if isinstance(result, MissingIdentifier):
            ctx.attributes[REDIRECT_FLAG] = True
            ctx.response.send_redirect(self._root_path)
        elif isinstance(result, InvalidInput):
            logger.warning("Invalid document identifier %r", result.raw)
        elif isinstance(result, NotFound):
            logger.debug("No document with id %s", result.document_id)
        return None

    async def pre_page(self, ctx: RequestContext) -> None:
        # A redirect issued while resolving in mutate already answered.
        if ctx.response.committed:
            return
        document = self._resolve_document(ctx)
        if document is not None:
            ctx.attributes[DOCUMENT_METADATA] = document.metadata()
        elif not ctx.response.committed:
            raise DocumentNotFound(NOT_FOUND_DETAIL)

    async def mutate(self, ctx: RequestContext) -> None:
        if ctx.params.get(BORROW_ACTION) is None:
            return
        document = self._resolve_document(ctx)
        if document is None:
            return

        try:
            with self._catalog.critical_section():
                self._catalog.borrow(document, ctx.identity)
        except BorrowError as exc:
            logger.info("Borrow of document %s refused: %s", document.id, exc.reason)
            ctx.attributes[MESSAGE] = exc.reason
        except Exception as exc:
            logger.exception("Borrow of document %s failed", document.id)
            ctx.attributes[MESSAGE] = str(exc)
        else:
            logger.info("Document %s borrowed", document.id)
            ctx.attributes[MESSAGE] = BORROW_SUCCESS

    async def not_accepted(self, ctx: RequestContext) -> None:
        ctx.response.send_redirect(self._login_path)
