"""Shared type aliases and protocols."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from media_library.context import RequestContext

# Acceptance predicate evaluated once per request
AcceptanceGate = Callable[["RequestContext"], bool]


class FragmentRenderer(Protocol):
    """Turns a named fragment and the request attributes into markup."""

    def render(self, fragment: str, ctx: RequestContext) -> str: ...
