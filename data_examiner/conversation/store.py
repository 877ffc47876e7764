"""
Conversation Session Store

Bounded per-session turn history used to give the analysis service
context for follow-up questions. Sessions live only in process memory.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from threading import RLock
from typing import Callable, Dict, List, Any
import asyncio
import logging
import time

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 20
DEFAULT_MAX_SESSIONS = 100


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Turn:
    role: Role
    content: str
    timestamp: float

    def to_dict(self) -> Dict[str, Any]:
        return {'role': self.role.value, 'content': self.content, 'timestamp': self.timestamp}


@dataclass
class ConversationSession:
    session_id: str
    turns: List[Turn] = field(default_factory=list)
    created_at: float = 0.0
    last_accessed: float = 0.0


class SessionStore(ABC):
    """Interface for conversation storage."""

    @abstractmethod
    def append(self, session_id: str, role: str, content: str) -> None:
        """Append a turn, creating the session if needed."""

    @abstractmethod
    def get(self, session_id: str) -> List[Turn]:
        """Ordered turns of a session, empty for unknown ids."""

    @abstractmethod
    def clear(self, session_id: str) -> None:
        """Remove a session entirely."""

    @abstractmethod
    def sweep(self) -> int:
        """Evict sessions when over capacity; returns how many were removed."""

    @abstractmethod
    def count(self) -> int:
        """Number of live sessions."""

    @abstractmethod
    def lock(self, session_id: str) -> asyncio.Lock:
        """Lock serializing exchanges on one session."""


class InMemorySessionStore(SessionStore):
    """
    Thread-safe in-memory store with per-session access timestamps.

    Each session keeps at most ``max_turns`` turns (oldest dropped first).
    When the store holds more than ``max_sessions`` sessions, ``sweep``
    evicts the least recently accessed half.
    """

    def __init__(
        self,
        max_turns: int = DEFAULT_MAX_TURNS,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], float] = time.time,
    ):
        self.max_turns = max_turns
        self.max_sessions = max_sessions
        self._clock = clock
        self._sessions: Dict[str, ConversationSession] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._mutex = RLock()

    def append(self, session_id: str, role: str, content: str) -> None:
        turn_role = Role(role)
        now = self._clock()
        with self._mutex:
            session = self._sessions.get(session_id)
            if session is None:
                session = ConversationSession(session_id=session_id, created_at=now)
                self._sessions[session_id] = session
            session.turns.append(Turn(role=turn_role, content=content, timestamp=now))
            overflow = len(session.turns) - self.max_turns
            if overflow > 0:
                del session.turns[:overflow]
            session.last_accessed = now

    def get(self, session_id: str) -> List[Turn]:
        with self._mutex:
            session = self._sessions.get(session_id)
            if session is None:
                return []
            session.last_accessed = self._clock()
            return list(session.turns)

    def clear(self, session_id: str) -> None:
        with self._mutex:
            self._sessions.pop(session_id, None)
            lock = self._locks.get(session_id)
            if lock is not None and not lock.locked():
                del self._locks[session_id]

    def sweep(self) -> int:
        with self._mutex:
            total = len(self._sessions)
            if total <= self.max_sessions:
                return 0
            by_age = sorted(self._sessions.values(), key=lambda session: session.last_accessed)
            evicted = [session.session_id for session in by_age[:total // 2]]
            for session_id in evicted:
                del self._sessions[session_id]
                lock = self._locks.get(session_id)
                if lock is not None and not lock.locked():
                    del self._locks[session_id]
        logger.info(f"Cleaned up {len(evicted)} least recently used conversations")
        return len(evicted)

    def count(self) -> int:
        with self._mutex:
            return len(self._sessions)

    def lock(self, session_id: str) -> asyncio.Lock:
        with self._mutex:
            lock = self._locks.get(session_id)
            if lock is None:
                lock = asyncio.Lock()
                self._locks[session_id] = lock
            return lock


async def sweep_periodically(store: SessionStore, interval: float) -> None:
    """Run ``store.sweep`` every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            store.sweep()
        except Exception as e:
            logger.error(f"Session sweep failed: {e}")
