"""PageService base — the hook set driven by RequestPipeline."""

from __future__ import annotations

from typing import ClassVar

from media_library._types import AcceptanceGate
from media_library.context import RequestContext
from media_library.exceptions import MethodNotAllowed
from media_library.gates import accept_all


class PageService:
    """Base abstraction for page services. Hooks are no-op by default.

    ``mutate`` and ``not_accepted`` raise MethodNotAllowed (405) unless a
    service overrides them.
    """

    fragment: ClassVar[str]

    def __init__(self, *, gate: AcceptanceGate | None = None) -> None:
        self._gate: AcceptanceGate = gate or accept_all

    async def pre(self, ctx: RequestContext) -> None:
        pass

    async def mutate(self, ctx: RequestContext) -> None:
        raise MethodNotAllowed()

    def accept(self, ctx: RequestContext) -> bool:
        return self._gate(ctx)

    async def not_accepted(self, ctx: RequestContext) -> None:
        raise MethodNotAllowed()

    async def pre_page(self, ctx: RequestContext) -> None:
        pass

    async def pre_content(self, ctx: RequestContext) -> None:
        pass

    async def post_content(self, ctx: RequestContext) -> None:
        pass

    async def post_page(self, ctx: RequestContext) -> None:
        pass

    async def post(self, ctx: RequestContext) -> None:
        pass
