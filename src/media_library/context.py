"""RequestContext — per-request state container."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from starlette.requests import Request

from media_library.response import PageResponse

if TYPE_CHECKING:
    from media_library.session import Session

DOCUMENT_METADATA = "document-metadata"
MESSAGE = "message"
REDIRECT_FLAG = "redirect-flag"
ACTION_TOKEN = "action-token"


@dataclass
class RequestContext:
    """Per-request attribute bag filled by hooks and read by the renderer."""

    request: Request
    params: Mapping[str, str] = field(default_factory=dict)
    session: Session | None = None
    response: PageResponse = field(default_factory=PageResponse)
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def is_mutating(self) -> bool:
        return self.request.method.upper() == "POST"

    @property
    def identity(self) -> Any | None:
        if self.session is None:
            return None
        return self.session.identity
