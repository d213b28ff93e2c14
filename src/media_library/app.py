"""Application factory wiring the document service into FastAPI."""

from __future__ import annotations

from fastapi import FastAPI

from media_library._types import FragmentRenderer
from media_library.catalog import CatalogStore, InMemoryCatalog
from media_library.config import Settings, get_settings
from media_library.endpoint import pipeline_endpoint
from media_library.gates import SubscriberGate
from media_library.logging_config import setup_logging
from media_library.pipeline import RequestPipeline
from media_library.rendering import TemplateFragmentRenderer
from media_library.services.document import DocumentService
from media_library.session import InMemorySessionStore, SessionStore


def create_app(
    settings: Settings | None = None,
    *,
    catalog: CatalogStore | None = None,
    sessions: SessionStore | None = None,
    renderer: FragmentRenderer | None = None,
) -> FastAPI:
    """Build the FastAPI app serving ``GET``/``POST /document``.

    Collaborators default to in-memory implementations and are exposed on
    ``app.state`` so tests and startup code can seed them.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    catalog = catalog if catalog is not None else InMemoryCatalog()
    sessions = sessions if sessions is not None else InMemorySessionStore()
    renderer = renderer or TemplateFragmentRenderer(app_name=settings.app_name)

    gate = SubscriberGate() if settings.require_subscriber else None
    service = DocumentService(
        catalog,
        gate=gate,
        root_path=settings.root_path,
        login_path=settings.login_path,
    )
    pipeline = RequestPipeline(
        service,
        renderer=renderer,
        sessions=sessions,
        header_fragment=settings.header_fragment,
        footer_fragment=settings.footer_fragment,
        debug=settings.debug,
    )

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.sessions = sessions
    app.add_api_route(
        "/document",
        pipeline_endpoint(pipeline, cookie_name=settings.session_cookie),
        methods=["GET", "POST"],
    )
    return app
