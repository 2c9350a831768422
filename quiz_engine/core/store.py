"""
In-memory session registry

One SessionStore instance is built per engine and torn down with it;
nothing here is module-level, so independent engines never share state.
"""
import logging
from threading import Lock, RLock
from typing import Any, Dict, Optional

from quiz_engine.errors import AccessError, InputError
from quiz_engine.models import Session, SessionState


logger = logging.getLogger(__name__)


class SessionStore:
    """Sessions keyed by id, at most one active session per game"""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}
        self._active_by_game: Dict[str, str] = {}
        self._locks: Dict[str, RLock] = {}
        self._locks_guard = Lock()

    def lock_for(self, game_id: str) -> RLock:
        """Mutual-exclusion scope for every writer touching this game's session"""
        with self._locks_guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = self._locks[game_id] = RLock()
            return lock

    def add_session(self, session: Session) -> None:
        if session.game_id in self._active_by_game:
            raise InputError(f"Game {session.game_id} already has an active session")
        self._sessions[session.id] = session
        self._active_by_game[session.game_id] = session.id

    def get_session(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise AccessError(f"Session {session_id} does not exist")
        return session

    def active_session_id(self, game_id: str) -> Optional[str]:
        return self._active_by_game.get(game_id)

    def mark_ended(self, session: Session) -> None:
        if self._active_by_game.get(session.game_id) == session.id:
            del self._active_by_game[session.game_id]

    def replace_session(self, session: Session) -> None:
        """Swap in a new version of a stored session as one assignment"""
        if session.id not in self._sessions:
            raise AccessError(f"Session {session.id} does not exist")
        self._sessions[session.id] = session

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data dump of every session"""
        return {"sessions": [s.model_dump(mode="json") for s in self._sessions.values()]}

    def restore(self, data: Dict[str, Any]) -> None:
        """Rebuild the registry from a snapshot, replacing current content"""
        sessions = [Session(**raw) for raw in data.get("sessions", [])]
        self._sessions = {s.id: s for s in sessions}
        self._active_by_game = {
            s.game_id: s.id for s in sessions if s.status != SessionState.ENDED
        }
        logger.info(f"Restored {len(sessions)} sessions ({len(self._active_by_game)} active)")

    def clear(self) -> int:
        count = len(self._sessions)
        self._sessions.clear()
        self._active_by_game.clear()
        with self._locks_guard:
            self._locks.clear()
        return count

    def __len__(self) -> int:
        return len(self._sessions)
