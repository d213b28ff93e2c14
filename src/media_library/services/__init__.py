"""Concrete page services."""

from media_library.services.document import DocumentService

__all__ = ["DocumentService"]
