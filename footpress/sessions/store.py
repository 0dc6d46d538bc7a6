# footpress/sessions/store.py
import time
import logging
import threading
from typing import Callable, Dict, Optional

from footpress import config
from footpress.analysis.bmi import classify_bmi
from footpress.sessions.session import Session, STATUS_COMPLETE, STATUS_CANCELLED
from footpress.suggestions.provider import SuggestionProvider

logger = logging.getLogger(__name__)

_FINISHED = (STATUS_COMPLETE, STATUS_CANCELLED)


class SessionStore:
    """
    In-memory sessions for the lifetime of the process. Nothing is persisted.

    Finished sessions are kept for `ttl_seconds` after creation so the page can
    read its report, then evicted on the next create()/get().
    """

    def __init__(self, fetch: Callable, provider: SuggestionProvider,
                 ticks: Optional[int] = None, tick_seconds: Optional[float] = None,
                 ttl_seconds: Optional[float] = None):
        self.fetch = fetch
        self.provider = provider
        self.ticks = ticks
        self.tick_seconds = tick_seconds
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else config.SESSION_TTL_SECONDS
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self, name: str, height, weight) -> Session:
        """Validate biometrics and start a session; raises InvalidBiometrics on bad input."""
        bmi = classify_bmi(height, weight)
        session = Session(
            name=(name or "").strip(),
            bmi=bmi,
            fetch=self.fetch,
            provider=self.provider,
            ticks=self.ticks,
            tick_seconds=self.tick_seconds,
        )
        with self._lock:
            self._evict_expired()
            self._sessions[session.id] = session
        session.start()
        return session

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            self._evict_expired()
            return self._sessions.get(session_id)

    def __len__(self):
        with self._lock:
            return len(self._sessions)

    def discard(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.cancel()
        logger.info("Session %s discarded", session_id)
        return True

    def close(self):
        with self._lock:
            ids = list(self._sessions)
        for sid in ids:
            self.discard(sid)
        self.provider.shutdown()

    def _evict_expired(self):
        # Caller holds the lock
        cutoff = time.time() - self.ttl_seconds
        expired = [sid for sid, s in self._sessions.items()
                   if s.created_at <= cutoff and s.status in _FINISHED]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Evicted %d finished sessions", len(expired))
