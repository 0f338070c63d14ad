import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from .session import SkinAnalysisSession

logger = logging.getLogger(__name__)


class SessionStore:
    """
    In-memory sessions keyed by cookie id, least recently used first.

    Sessions idle longer than ``idle_ttl`` seconds are dropped, and the
    oldest ones go once there are more than ``max_sessions``. Dropping a
    session resets it, which deletes its stored upload and revokes its
    preview url.
    """

    def __init__(self, max_sessions: int = 1000, idle_ttl: float = 1800.0, clock: Callable[[], float] = time.monotonic):
        self.max_sessions = max_sessions
        self.idle_ttl = idle_ttl
        self.clock = clock
        self._items: "OrderedDict[str, Tuple[SkinAnalysisSession, float]]" = OrderedDict()

    def get(self, session_id: Optional[str]) -> Optional[SkinAnalysisSession]:
        self.evict_expired()
        if not session_id or session_id not in self._items:
            return None
        session, _ = self._items.pop(session_id)
        self._items[session_id] = (session, self.clock())
        return session

    def create(self, factory: Callable[[], SkinAnalysisSession]) -> Tuple[str, SkinAnalysisSession]:
        self.evict_expired()
        session_id = uuid.uuid4().hex
        session = factory()
        self._items[session_id] = (session, self.clock())
        while len(self._items) > self.max_sessions:
            oldest = next(iter(self._items))
            self._drop(oldest, "over capacity")
        return session_id, session

    def evict_expired(self) -> None:
        cutoff = self.clock() - self.idle_ttl
        # ordered by last use, so stop at the first one still fresh
        while self._items:
            session_id, (_, last_used) = next(iter(self._items.items()))
            if last_used > cutoff:
                break
            self._drop(session_id, "idle")

    def close_all(self) -> None:
        for session_id in list(self._items):
            self._drop(session_id, "shutdown")

    def _drop(self, session_id: str, reason: str) -> None:
        session, _ = self._items.pop(session_id)
        session.reset()
        logger.debug("Dropped session %s (%s)", session_id, reason)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._items

    def __len__(self) -> int:
        return len(self._items)
