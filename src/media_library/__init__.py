"""Media Library - document pages served through a hook-driven request pipeline."""

from media_library._types import AcceptanceGate, FragmentRenderer
from media_library.app import create_app
from media_library.catalog import CatalogStore, Document, InMemoryCatalog, Patron
from media_library.config import Settings, get_settings
from media_library.context import (
    ACTION_TOKEN,
    DOCUMENT_METADATA,
    MESSAGE,
    REDIRECT_FLAG,
    RequestContext,
)
from media_library.endpoint import pipeline_endpoint
from media_library.exceptions import (
    BorrowError,
    CatalogError,
    DocumentNotFound,
    FragmentNotFound,
    MethodNotAllowed,
    PipelineAbort,
    PipelineException,
    PipelineInternalError,
)
from media_library.gates import SubscriberGate, accept_all
from media_library.hooks import PageService
from media_library.pipeline import RequestPipeline
from media_library.rendering import TemplateFragmentRenderer
from media_library.resolution import (
    DocumentLookup,
    Found,
    InvalidInput,
    MissingIdentifier,
    NotFound,
    lookup_document,
    parse_document_id,
)
from media_library.response import PageResponse
from media_library.services.document import DocumentService
from media_library.session import InMemorySessionStore, Session, SessionStore
from media_library.trace import Phase, PipelineTrace, TraceEntry

__all__ = [
    "ACTION_TOKEN",
    "AcceptanceGate",
    "BorrowError",
    "CatalogError",
    "CatalogStore",
    "DOCUMENT_METADATA",
    "Document",
    "DocumentLookup",
    "DocumentNotFound",
    "DocumentService",
    "Found",
    "FragmentNotFound",
    "FragmentRenderer",
    "InMemoryCatalog",
    "InMemorySessionStore",
    "InvalidInput",
    "MESSAGE",
    "MethodNotAllowed",
    "MissingIdentifier",
    "NotFound",
    "PageResponse",
    "PageService",
    "Patron",
    "Phase",
    "PipelineAbort",
    "PipelineException",
    "PipelineInternalError",
    "PipelineTrace",
    "REDIRECT_FLAG",
    "RequestContext",
    "RequestPipeline",
    "Session",
    "SessionStore",
    "Settings",
    "SubscriberGate",
    "TemplateFragmentRenderer",
    "TraceEntry",
    "accept_all",
    "create_app",
    "get_settings",
    "lookup_document",
    "parse_document_id",
    "pipeline_endpoint",
]
