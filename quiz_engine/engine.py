"""
QuizEngine - the operations exposed to admin and player callers

Owns one SessionStore, SessionEngine, PlayerRegistry and ResultsProjector.
Build one per application (or per test) and call close() on teardown.
"""
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from quiz_engine.catalog import InMemoryGameCatalog
from quiz_engine.core.session import SessionEngine
from quiz_engine.core.store import SessionStore
from quiz_engine.models import (
    EngineSettings,
    PlayerQuestion,
    PlayerResults,
    Session,
    SessionResults,
    SessionStatus,
)
from quiz_engine.services.player_registry import PlayerRegistry
from quiz_engine.services.results import ResultsProjector


logger = logging.getLogger(__name__)


class QuizEngine:

    def __init__(
        self,
        catalog: InMemoryGameCatalog,
        settings: Optional[EngineSettings] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.catalog = catalog
        self.clock = clock
        self.store = SessionStore()
        self.players = PlayerRegistry(
            self.store,
            clock=clock,
            allow_late_join=self.settings.allow_late_join,
        )
        self.sessions = SessionEngine(
            catalog,
            self.store,
            clock=clock,
            player_name=self.players.player_name,
        )
        self.results = ResultsProjector()

    # ==================== ADMIN ====================

    def start_session(self, game_id: str, owner: Optional[str] = None) -> Dict[str, str]:
        return {"sessionId": self.sessions.start(game_id, owner)}

    def advance_session(self, game_id: str, owner: Optional[str] = None) -> Session:
        return self.sessions.advance(game_id, owner)

    def end_session(self, game_id: str, owner: Optional[str] = None) -> Session:
        return self.sessions.end(game_id, owner)

    def session_status(self, session_id: str, owner: Optional[str] = None) -> SessionStatus:
        return self.sessions.status(session_id, owner)

    def session_results(self, session_id: str, owner: Optional[str] = None) -> SessionResults:
        session = self.sessions.require_owned_session(session_id, owner)
        return self.results.compute(session, self.players.players_for(session_id), self.clock())

    # ==================== PLAYER ====================

    def join_session(self, session_id: str, name: str) -> Dict[str, str]:
        return {"playerId": self.players.join(session_id, name)}

    def player_status(self, player_id: str) -> Dict[str, bool]:
        return {"started": self.players.has_started(player_id)}

    def player_question(self, player_id: str) -> PlayerQuestion:
        return self.players.current_question(player_id)

    def submit_player_answer(self, player_id: str, answer_ids: List[Any]) -> None:
        self.players.submit_answer(player_id, answer_ids)

    def player_correct_answer(self, player_id: str) -> Dict[str, List[str]]:
        return {"answerIds": self.players.reveal_answer(player_id)}

    def player_results(self, player_id: str) -> PlayerResults:
        player = self.players.get_player(player_id)
        session = self.players.session_of(player_id)
        return self.results.player_results(session, player, self.clock())

    # ==================== LIFECYCLE ====================

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data state of all sessions and players, for external persistence"""
        return {**self.store.snapshot(), **self.players.snapshot()}

    def restore(self, data: Dict[str, Any]) -> None:
        self.store.restore(data)
        self.players.restore(data)

    def close(self) -> None:
        sessions = self.store.clear()
        players = self.players.clear()
        logger.info(f"🔄 Engine closed. Cleared {sessions} sessions and {players} players.")
