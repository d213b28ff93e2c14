"""RequestPipeline — the lifecycle every page service request goes through."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from media_library._types import FragmentRenderer
from media_library.context import RequestContext
from media_library.exceptions import PipelineAbort
from media_library.hooks import PageService
from media_library.session import SessionStore
from media_library.trace import Phase, PipelineTrace, TraceEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")

HEADER_FRAGMENT = "modules/header"
FOOTER_FRAGMENT = "modules/footer"


class RequestPipeline:
    """Runs a PageService's hooks in canonical order for GET and POST.

    ENTER -> PRE -> [MUTATE] -> GATE -> PAGE | REJECTED -> POST.

    MUTATE only runs for POST requests and always before the gate, so page
    hooks observe post-mutation catalog state. Fragments are not written once
    a hook has committed the response with an error or a redirect. A hook
    raising PipelineAbort commits that status the same way.
    """

    def __init__(
        self,
        service: PageService,
        *,
        renderer: FragmentRenderer,
        sessions: SessionStore,
        header_fragment: str = HEADER_FRAGMENT,
        footer_fragment: str = FOOTER_FRAGMENT,
        debug: bool = False,
    ) -> None:
        self._service = service
        self._renderer = renderer
        self._sessions = sessions
        self._header_fragment = header_fragment
        self._footer_fragment = footer_fragment
        self._debug = debug

    @property
    def service(self) -> PageService:
        return self._service

    async def run(
        self, ctx: RequestContext, *, session_id: str | None = None
    ) -> RequestContext:
        trace = PipelineTrace() if self._debug else None
        started = time.perf_counter()
        service = self._service

        try:
            await self._step(ctx, trace, Phase.ENTER, self._enter, ctx, session_id)
            await self._step(ctx, trace, Phase.PRE, service.pre, ctx)
            if ctx.is_mutating:
                await self._step(ctx, trace, Phase.MUTATE, service.mutate, ctx)
            accepted = await self._step(ctx, trace, Phase.GATE, self._accept, ctx)
            if accepted:
                await self._step(ctx, trace, Phase.PAGE, self._page, ctx)
            else:
                await self._step(
                    ctx, trace, Phase.REJECTED, service.not_accepted, ctx
                )
            await self._step(ctx, trace, Phase.POST, service.post, ctx)
        except Exception as exc:
            if trace is not None:
                trace.total_duration_ms = (time.perf_counter() - started) * 1000
                trace.outcome = "ERROR"
                trace.error = exc
                ctx.attributes["trace"] = trace
            raise

        if trace is not None:
            trace.total_duration_ms = (time.perf_counter() - started) * 1000
            ctx.attributes["trace"] = trace
        return ctx

    async def _step(
        self,
        ctx: RequestContext,
        trace: PipelineTrace | None,
        phase: Phase,
        func: Callable[..., Awaitable[T]],
        *args: Any,
    ) -> T | None:
        """Run one phase.

        A ``PipelineAbort`` ends the phase and commits its status on the
        response; the lifecycle then carries on, so POST still runs. Any other
        exception propagates.
        """
        phase_started = time.perf_counter()
        try:
            result = await func(*args)
        except PipelineAbort as exc:
            logger.debug(
                "%s aborted with %s: %s", phase.value, exc.status_code, exc.detail
            )
            if trace is not None:
                trace.entries.append(
                    TraceEntry(
                        phase=phase,
                        duration_ms=(time.perf_counter() - phase_started) * 1000,
                        outcome="FAILED",
                        reason=exc.detail,
                    )
                )
                trace.outcome = "ABORTED"
                trace.error = exc
            ctx.response.send_error(exc.status_code, exc.detail)
            return None
        except Exception as exc:
            if trace is not None:
                trace.entries.append(
                    TraceEntry(
                        phase=phase,
                        duration_ms=(time.perf_counter() - phase_started) * 1000,
                        outcome="FAILED",
                        reason=str(exc),
                    )
                )
            raise
        if trace is not None:
            trace.entries.append(
                TraceEntry(
                    phase=phase,
                    duration_ms=(time.perf_counter() - phase_started) * 1000,
                    outcome="OK",
                )
            )
        return result

    async def _enter(self, ctx: RequestContext, session_id: str | None) -> None:
        if ctx.session is None:
            ctx.session = self._sessions.get_or_create(session_id)
            if ctx.session.is_new:
                logger.debug("Created session %s", ctx.session.session_id)

    async def _accept(self, ctx: RequestContext) -> bool:
        accepted = bool(self._service.accept(ctx))
        if not accepted:
            logger.debug(
                "%s rejected %s %s",
                type(self._service).__name__,
                ctx.request.method,
                ctx.request.url.path,
            )
        return accepted

    async def _page(self, ctx: RequestContext) -> None:
        service = self._service
        await service.pre_page(ctx)
        self._render(self._header_fragment, ctx)
        await service.pre_content(ctx)
        self._render(service.fragment, ctx)
        await service.post_content(ctx)
        self._render(self._footer_fragment, ctx)
        await service.post_page(ctx)

    def _render(self, fragment: str, ctx: RequestContext) -> None:
        if ctx.response.committed:
            return
        ctx.response.write(self._renderer.render(fragment, ctx))
