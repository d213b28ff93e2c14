"""pipeline_endpoint() — factory producing FastAPI-compatible endpoints."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import HTTPException
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from media_library.context import RequestContext
from media_library.exceptions import PipelineInternalError
from media_library.pipeline import RequestPipeline

logger = logging.getLogger(__name__)


def pipeline_endpoint(
    pipeline: RequestPipeline, *, cookie_name: str = "session"
) -> Callable[[Request], Awaitable[Response]]:
    """Return an endpoint that runs ``pipeline`` for GET and POST requests."""

    async def endpoint(request: Request) -> Response:
        ctx = RequestContext(request=request, params=await _collect_params(request))

        try:
            await pipeline.run(ctx, session_id=request.cookies.get(cookie_name))
        except Exception as exc:
            logger.exception(
                "Unhandled error in %s for %s %s",
                type(pipeline.service).__name__,
                request.method,
                request.url.path,
            )
            wrapped = PipelineInternalError("Internal pipeline error", cause=exc)
            raise HTTPException(status_code=500, detail=wrapped.detail) from wrapped

        response = _to_response(ctx)
        if ctx.session is not None and ctx.session.is_new:
            response.set_cookie(
                cookie_name, ctx.session.session_id, httponly=True, samesite="lax"
            )
        return response

    return endpoint


async def _collect_params(request: Request) -> dict[str, str]:
    # Query parameters win over form fields with the same name.
    params: dict[str, str] = {}
    if request.method.upper() == "POST":
        form = await request.form()
        for key, value in form.items():
            if isinstance(value, str):
                params[key] = value
    params.update(request.query_params)
    return params


def _to_response(ctx: RequestContext) -> Response:
    page = ctx.response
    if page.location is not None:
        return RedirectResponse(
            page.location, status_code=page.status_code, headers=page.headers
        )
    if page.status_code >= 400:
        return JSONResponse(
            {"detail": page.detail}, status_code=page.status_code, headers=page.headers
        )
    return HTMLResponse(page.body, status_code=page.status_code, headers=page.headers)
