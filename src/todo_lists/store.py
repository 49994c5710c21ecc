"""In-memory registry of browser sessions."""

from __future__ import annotations

import logging
import secrets
import threading
import time
from collections import OrderedDict
from typing import Optional, Tuple

from .session import ListSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Thread-safe map of session id to :class:`ListSession`.

    Sessions idle for longer than ``ttl_seconds`` are torn down on the next
    lookup. When more than ``max_sessions`` are alive the least recently used
    one is evicted.
    """

    def __init__(self, ttl_seconds: float = 86400, max_sessions: int = 1000) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self._lock = threading.Lock()
        self._sessions: "OrderedDict[str, ListSession]" = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def _is_expired(self, session: ListSession, now: float) -> bool:
        return now - session.last_accessed > self.ttl_seconds

    def purge_expired(self) -> int:
        """Drop every expired session. Returns the number removed."""
        now = time.monotonic()
        with self._lock:
            expired = [sid for sid, session in self._sessions.items() if self._is_expired(session, now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info("Expired %d idle session(s)", len(expired))
        return len(expired)

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, ListSession]:
        """Return the live session for ``session_id`` or start a new one."""
        self.purge_expired()
        with self._lock:
            session = self._sessions.get(session_id) if session_id else None
            if session is not None:
                self._sessions.move_to_end(session_id)
                session.touch()
                return session_id, session

            new_id = secrets.token_urlsafe(32)
            session = ListSession(new_id)
            self._sessions[new_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.info("Evicted least recently used session %s", evicted_id[:8])
        logger.info("Started session %s", new_id[:8])
        return new_id, session
