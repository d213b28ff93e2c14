"""Acceptance gates — predicates deciding whether a page is rendered."""

from __future__ import annotations

from media_library.context import RequestContext


def accept_all(ctx: RequestContext) -> bool:
    """Gate that accepts every request."""
    return True


class SubscriberGate:
    """Accepts requests whose session carries an identity.

    With ``require_subscriber`` the identity must also expose a truthy
    ``subscriber`` attribute.
    """

    def __init__(self, *, require_subscriber: bool = True) -> None:
        self._require_subscriber = require_subscriber

    def __call__(self, ctx: RequestContext) -> bool:
        identity = ctx.identity
        if identity is None:
            return False
        if self._require_subscriber:
            return bool(getattr(identity, "subscriber", False))
        return True
