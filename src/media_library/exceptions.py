"""PipelineException hierarchy for controlled aborts and domain failures."""

from __future__ import annotations


class PipelineException(Exception):
    """Base for all pipeline exceptions."""


class PipelineAbort(PipelineException):
    """Controlled abort with HTTP status code and detail."""

    def __init__(self, detail: str, *, status_code: int = 400) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class DocumentNotFound(PipelineAbort):
    """No document matches the requested identifier (404)."""

    def __init__(self, detail: str = "Document not found.") -> None:
        super().__init__(detail, status_code=404)


class MethodNotAllowed(PipelineAbort):
    """Request method is not handled by the service (405)."""

    def __init__(self, detail: str = "Method not allowed") -> None:
        super().__init__(detail, status_code=405)


class PipelineInternalError(PipelineException):
    """Engine-level error wrapping unexpected exceptions."""

    def __init__(self, detail: str, *, cause: Exception | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.cause = cause


class FragmentNotFound(PipelineException):
    """Renderer has no template for the requested fragment."""

    def __init__(self, fragment: str) -> None:
        super().__init__(f"Unknown fragment: {fragment}")
        self.fragment = fragment


class CatalogError(Exception):
    """Base for failures raised by catalog operations."""


class BorrowError(CatalogError):
    """Borrow rejected by a business rule."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
