"""Client sessions — Session, SessionStore, InMemorySessionStore."""

from __future__ import annotations

import secrets
import threading
from typing import Any, Protocol, runtime_checkable

IDENTITY_KEY = "user"


class Session:
    """Per-client key/value store that outlives a single request."""

    def __init__(self, session_id: str, *, is_new: bool = False) -> None:
        self.session_id = session_id
        self.is_new = is_new
        self._values: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    @property
    def identity(self) -> Any | None:
        return self.get(IDENTITY_KEY)

    def attach_identity(self, identity: Any) -> None:
        self.set(IDENTITY_KEY, identity)


@runtime_checkable
class SessionStore(Protocol):
    """Pluggable storage interface for client sessions."""

    def get_or_create(self, session_id: str | None) -> Session: ...


class InMemorySessionStore:
    """Default in-memory session store. Single-process only."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str | None) -> Session:
        with self._lock:
            if session_id is not None and session_id in self._sessions:
                session = self._sessions[session_id]
                session.is_new = False
                return session
            new_id = secrets.token_urlsafe(24)
            session = Session(new_id, is_new=True)
            self._sessions[new_id] = session
            return session

    def __len__(self) -> int:
        return len(self._sessions)
