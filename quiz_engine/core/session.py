"""
Session state machine: start / advance / end and the polling status read

    LOBBY --advance--> ACTIVE --advance--> ACTIVE --advance(past last)--> ENDED
    end: any --> ENDED

Every write for a game runs inside that game's lock from the SessionStore,
and is applied only after all checks passed.
"""
import logging
import time
from typing import Callable, Optional

from quiz_engine.catalog import InMemoryGameCatalog
from quiz_engine.core.store import SessionStore
from quiz_engine.core.timing import session_remaining_time
from quiz_engine.errors import AccessError, InputError
from quiz_engine.models import Game, Session, SessionState, SessionStatus
from quiz_engine.utils import new_session_id


logger = logging.getLogger(__name__)


class SessionEngine:
    """Admin-driven progression of game sessions"""

    def __init__(
        self,
        catalog: InMemoryGameCatalog,
        store: SessionStore,
        clock: Callable[[], float] = time.time,
        player_name: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.clock = clock
        # maps player id -> display name for status reads
        self.player_name = player_name or str

    # ==================== HELPERS ====================

    def _require_game(self, game_id: str, owner: Optional[str]) -> Game:
        game = self.catalog.get_game(game_id)
        if game is None:
            raise AccessError(f"Game {game_id} does not exist")
        if owner is not None and game.owner != owner:
            raise AccessError("Admin is not the owner of this game")
        return game

    def _active_session(self, game: Game) -> Session:
        if not game.active:
            raise InputError(f"Game {game.id} has no active session")
        session = self.store.get_session(game.active)
        if session is None or session.is_ended:
            raise InputError(f"Game {game.id} has no active session")
        return session

    def _end_locked(self, game: Game, session: Session, position: Optional[int] = None) -> Session:
        updated = game.model_copy(update={
            "active": None,
            "history": [*game.history, session.id],
        })
        self.catalog.replace_game(updated)

        ended = session.model_copy(update={
            "status": SessionState.ENDED,
            "ended_at": self.clock(),
            "position": session.position if position is None else position,
        })
        self.store.replace_session(ended)
        self.store.mark_ended(ended)
        logger.info(
            f"🛑 Session {ended.id} of game {game.id} ended "
            f"({len(ended.player_ids)} players)"
        )
        return ended

    # ==================== TRANSITIONS ====================

    def start(self, game_id: str, owner: Optional[str] = None) -> str:
        """
        Start a new session for a game

        Returns:
            The new session id

        Raises:
            AccessError: Unknown game or not its owner
            InputError: A session is already active for the game
        """
        with self.store.lock_for(game_id):
            game = self._require_game(game_id, owner)
            if game.active or self.store.active_session_id(game_id):
                raise InputError("Game already has active session")

            session = Session(
                id=new_session_id(),
                game_id=game.id,
                owner=game.owner,
                questions=[q.model_copy(deep=True) for q in game.questions],
                created_at=self.clock(),
            )
            self.catalog.replace_game(game.model_copy(update={"active": session.id}))
            self.store.add_session(session)

        logger.info(
            f"✅ Session {session.id} started for game {game_id} "
            f"with {len(session.questions)} questions"
        )
        return session.id

    def advance(self, game_id: str, owner: Optional[str] = None) -> Session:
        """
        Open the next question, or end the session after the last one

        The updated session replaces the stored one in a single swap, so
        an unlocked poll sees either the old or the new position/start time.

        Returns:
            The session as committed

        Raises:
            AccessError: Unknown game or not its owner
            InputError: No active session
        """
        with self.store.lock_for(game_id):
            game = self._require_game(game_id, owner)
            session = self._active_session(game)

            next_position = session.position + 1
            if next_position >= len(session.questions):
                return self._end_locked(game, session, position=next_position)

            session = session.model_copy(update={
                "position": next_position,
                "question_started_at": self.clock(),
                "status": SessionState.ACTIVE,
            })
            self.store.replace_session(session)

        logger.info(
            f"➡️ Session {session.id} advanced to question "
            f"{next_position + 1}/{len(session.questions)}"
        )
        return session

    def end(self, game_id: str, owner: Optional[str] = None) -> Session:
        """
        Force the active session to ENDED

        Raises:
            AccessError: Unknown game or not its owner
            InputError: No active session
        """
        with self.store.lock_for(game_id):
            game = self._require_game(game_id, owner)
            session = self._active_session(game)
            return self._end_locked(game, session)

    # ==================== READS ====================

    def require_owned_session(self, session_id: str, owner: Optional[str] = None) -> Session:
        session = self.store.require_session(session_id)
        if owner is not None and session.owner != owner:
            raise AccessError("Admin is not the owner of this session")
        return session

    def status(self, session_id: str, owner: Optional[str] = None) -> SessionStatus:
        """Pure read for high-frequency polling"""
        session = self.require_owned_session(session_id, owner)
        now = self.clock()
        remaining = session_remaining_time(session, now)
        opened = session.current_question is not None

        return SessionStatus(
            session_id=session.id,
            game_id=session.game_id,
            active=not session.is_ended,
            status=session.status,
            position=session.position,
            question_count=len(session.questions),
            # copies: callers must never reach the session's captured questions
            questions=[q.model_copy(deep=True) for q in session.questions],
            question_started_at=session.question_started_at,
            remaining_time=round(remaining, 3),
            answer_available=opened and remaining <= 0,
            players=[self.player_name(pid) for pid in session.player_ids],
        )
