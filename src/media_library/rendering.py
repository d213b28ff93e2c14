"""TemplateFragmentRenderer — minimal HTML fragments for page services."""

from __future__ import annotations

import html
from collections.abc import Mapping
from typing import Any

from media_library.context import (
    ACTION_TOKEN,
    DOCUMENT_METADATA,
    MESSAGE,
    RequestContext,
)
from media_library.exceptions import FragmentNotFound

DEFAULT_TEMPLATES: dict[str, str] = {
    "modules/header": (
        "<!DOCTYPE html><html><head><title>{app_name}</title></head><body>"
        "<header><h1>{app_name}</h1>{message_block}</header><main>"
    ),
    "modules/footer": "</main><footer>{app_name}</footer></body></html>",
    "document": (
        '<article data-id="{id}"><h2>{title}</h2>'
        "<p>{author}</p><p>{kind}</p><p>{status}</p>"
        '<form method="post" action="?id={id}">'
        '<button type="submit" name="{action_token}" value="1">Borrow</button>'
        "</form></article>"
    ),
}


class _Blank(dict[str, str]):
    def __missing__(self, key: str) -> str:
        return ""


class TemplateFragmentRenderer:
    """Renders fragments from ``str.format`` templates.

    Every value taken from the request attributes is HTML-escaped.
    """

    def __init__(
        self,
        templates: Mapping[str, str] | None = None,
        *,
        app_name: str = "Media Library",
    ) -> None:
        self._templates = dict(DEFAULT_TEMPLATES)
        if templates:
            self._templates.update(templates)
        self._app_name = app_name

    def render(self, fragment: str, ctx: RequestContext) -> str:
        try:
            template = self._templates[fragment]
        except KeyError:
            raise FragmentNotFound(fragment) from None
        return template.format_map(self._values(ctx))

    def _values(self, ctx: RequestContext) -> _Blank:
        values = _Blank(app_name=html.escape(self._app_name))
        metadata: Mapping[str, Any] = ctx.attributes.get(DOCUMENT_METADATA) or {}
        for key, value in metadata.items():
            values[key] = html.escape(str(value))
        if metadata:
            values["status"] = "Available" if metadata.get("available") else "On loan"
        message = ctx.attributes.get(MESSAGE)
        if message:
            values["message_block"] = (
                f'<p class="message">{html.escape(str(message))}</p>'
            )
        values["action_token"] = html.escape(str(ctx.attributes.get(ACTION_TOKEN, "")))
        return values
