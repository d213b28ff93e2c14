"""PageResponse — response under construction during a pipeline pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class PageResponse:
    """Accumulates fragments, status and redirect target for one request.

    The first call to :meth:`send_error` or :meth:`send_redirect` commits the
    response. Later attempts to send another status are ignored and logged,
    and fragment writes are dropped.
    """

    status_code: int = 200
    fragments: list[str] = field(default_factory=list)
    location: str | None = None
    detail: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    committed: bool = False

    @property
    def is_redirect(self) -> bool:
        return self.location is not None

    def write(self, fragment: str) -> None:
        if self.committed:
            logger.debug("Dropping fragment write on committed response")
            return
        self.fragments.append(fragment)

    def send_error(self, status_code: int, detail: str | None = None) -> bool:
        if self.committed:
            logger.warning(
                "Response already committed with %s, ignoring error %s",
                self.status_code,
                status_code,
            )
            return False
        self.status_code = status_code
        self.detail = detail
        self.fragments.clear()
        self.committed = True
        return True

    def send_redirect(self, location: str, *, status_code: int = 303) -> bool:
        if self.committed:
            logger.warning(
                "Response already committed with %s, ignoring redirect to %s",
                self.status_code,
                location,
            )
            return False
        self.status_code = status_code
        self.location = location
        self.fragments.clear()
        self.committed = True
        return True

    @property
    def body(self) -> str:
        return "".join(self.fragments)
