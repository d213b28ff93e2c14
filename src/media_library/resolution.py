"""Tagged document lookup results and identifier parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from media_library.catalog import CatalogStore, Document


@dataclass(frozen=True)
class Found:
    document: Document


@dataclass(frozen=True)
class NotFound:
    document_id: int


@dataclass(frozen=True)
class InvalidInput:
    raw: str


@dataclass(frozen=True)
class MissingIdentifier:
    pass


DocumentLookup = Union[Found, NotFound, InvalidInput, MissingIdentifier]


def parse_document_id(raw: str | None) -> int | InvalidInput | MissingIdentifier:
    """Parse a signed 32-bit decimal identifier from a request parameter."""
    if raw is None:
        return MissingIdentifier()
    body = raw[1:] if raw[:1] in ("+", "-") else raw
    if not body or not body.isascii() or not body.isdigit():
        return InvalidInput(raw)
    value = int(raw)
    if not -(2**31) <= value < 2**31:
        return InvalidInput(raw)
    return value


def lookup_document(catalog: CatalogStore, raw: str | None) -> DocumentLookup:
    """Resolve ``raw`` against the catalog under its critical section."""
    parsed = parse_document_id(raw)
    if isinstance(parsed, (InvalidInput, MissingIdentifier)):
        return parsed
    with catalog.critical_section():
        document = catalog.lookup(parsed)
    if document is None:
        return NotFound(parsed)
    return Found(document)
