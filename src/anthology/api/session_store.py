"""
Anthology sessions.

Each session owns exactly one PoemCollection. A session ends when the
client deletes it, when it sits idle past the TTL, or when it is the least
recently used one and the store is full.
"""

import asyncio
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..collection import PoemCollection

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Session:
    """One user's anthology for the lifetime of the session."""
    session_id: str
    created_at: datetime = field(default_factory=_utcnow)
    last_activity: datetime = field(default_factory=_utcnow)
    collection: PoemCollection = field(default_factory=PoemCollection)
    # Serializes ingestion batches so only one mutates the collection at a time
    ingest_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def touch(self):
        self.last_activity = _utcnow()

    def is_idle(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.last_activity > ttl

    @property
    def item_count(self) -> int:
        return len(self.collection)


class SessionStore:
    """
    Sessions keyed by id, guarded by one lock.

    Idle sessions are dropped lazily: on lookup, and when a new session
    would exceed max_sessions. If the store is still full after that, the
    least recently active session is evicted to make room.
    """

    def __init__(self, ttl_minutes: int = 60, max_sessions: int = 1000):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()
        self.ttl = timedelta(minutes=ttl_minutes)
        self.max_sessions = max_sessions

    def create_session(self) -> Session:
        """Start a session with an empty collection."""
        session = Session(session_id=uuid.uuid4().hex)

        with self._lock:
            if len(self._sessions) >= self.max_sessions:
                self._cleanup_expired()
            if len(self._sessions) >= self.max_sessions:
                oldest = min(self._sessions.values(), key=lambda s: s.last_activity)
                self._drop(oldest.session_id, "evicted, store full")
            self._sessions[session.session_id] = session

        logger.debug(f"Session {session.session_id} started ({self.session_count} active)")
        return session

    def get_session(self, session_id: str) -> Optional[Session]:
        """Live session for the id, or None. A successful lookup counts as activity."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_idle(_utcnow(), self.ttl):
                self._drop(session_id, "expired")
                return None
            session.touch()
            return session

    def delete_session(self, session_id: str) -> bool:
        """End a session on request. Returns False if it did not exist."""
        with self._lock:
            return self._drop(session_id, "deleted") is not None

    def _cleanup_expired(self) -> int:
        """Drop every idle session (lock held). Returns how many were dropped."""
        now = _utcnow()
        idle = [sid for sid, s in self._sessions.items() if s.is_idle(now, self.ttl)]
        for sid in idle:
            self._drop(sid, "expired")
        return len(idle)

    def _drop(self, session_id: str, reason: str) -> Optional[Session]:
        """Remove one session (lock held) and log why."""
        session = self._sessions.pop(session_id, None)
        if session is not None:
            logger.info(f"Session {session_id} {reason}; discarded {session.item_count} poem(s)")
        return session

    @property
    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)
