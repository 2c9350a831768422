"""Player registration and per-question answer submission"""
import logging
import time
from typing import Any, Callable, Dict, Iterable, List

from quiz_engine.core.scoring import score
from quiz_engine.core.store import SessionStore
from quiz_engine.core.timing import session_remaining_time
from quiz_engine.errors import AccessError, InputError
from quiz_engine.models import Player, PlayerAnswerRecord, PlayerQuestion, Session
from quiz_engine.utils import new_player_id


logger = logging.getLogger(__name__)


class PlayerRegistry:
    """Players of every session and their answer slots"""

    def __init__(
        self,
        store: SessionStore,
        clock: Callable[[], float] = time.time,
        allow_late_join: bool = True,
    ) -> None:
        self.store = store
        self.clock = clock
        self.allow_late_join = allow_late_join
        self._players: Dict[str, Player] = {}

    # ==================== LOOKUPS ====================

    def get_player(self, player_id: str) -> Player:
        player = self._players.get(player_id)
        if player is None:
            raise AccessError(f"Player ID {player_id} does not exist")
        return player

    def player_name(self, player_id: str) -> str:
        player = self._players.get(player_id)
        return player.name if player else player_id

    def players_for(self, session_id: str) -> List[Player]:
        session = self.store.require_session(session_id)
        return [self._players[pid] for pid in session.player_ids if pid in self._players]

    def _live_session(self, player: Player) -> Session:
        session = self.store.get_session(player.session_id)
        if session is None:
            raise AccessError(f"Session {player.session_id} does not exist")
        if session.is_ended:
            raise AccessError("Session has ended")
        return session

    def session_of(self, player_id: str) -> Session:
        return self.store.require_session(self.get_player(player_id).session_id)

    # ==================== OPERATIONS ====================

    def join(self, session_id: str, name: Any) -> str:
        """
        Add a player to a LOBBY or ACTIVE session

        Raises:
            InputError: Missing, non-text or blank name, or late join while
                late joins are disabled
            AccessError: Unknown or ended session
        """
        if not isinstance(name, str) or not name.strip():
            raise InputError("Name must be supplied")
        clean_name = name.strip()

        game_id = self.store.require_session(session_id).game_id
        with self.store.lock_for(game_id):
            session = self.store.require_session(session_id)
            if session.is_ended:
                raise AccessError("Session has ended")
            if session.position >= 0 and not self.allow_late_join:
                raise InputError("Session has already begun")

            player = Player(
                id=new_player_id(clean_name),
                name=clean_name,
                session_id=session.id,
                joined_at=self.clock(),
                join_order=len(session.player_ids),
                answers=[
                    PlayerAnswerRecord(question_index=idx)
                    for idx in range(len(session.questions))
                ],
            )
            self._players[player.id] = player
            self.store.replace_session(
                session.model_copy(update={"player_ids": [*session.player_ids, player.id]})
            )

        logger.info(f"👤 {clean_name} joined session {session.id} as {player.id}")
        return player.id

    def has_started(self, player_id: str) -> bool:
        session = self._live_session(self.get_player(player_id))
        return session.position >= 0

    def current_question(self, player_id: str) -> PlayerQuestion:
        """Current question without correct flags, plus its timing"""
        session = self._live_session(self.get_player(player_id))
        question = session.current_question
        if question is None:
            raise InputError("Session has not started yet")

        return PlayerQuestion(
            question=question.public_view(),
            question_index=session.position,
            question_count=len(session.questions),
            question_started_at=session.question_started_at,
            remaining_time=round(session_remaining_time(session, self.clock()), 3),
        )

    def submit_answer(self, player_id: str, answer_ids: Iterable[Any]) -> None:
        """
        Record (or replace) the player's answer for the open question

        The window is judged from the server clock only.

        Raises:
            AccessError: Unknown player, or the session has ended
            InputError: No question open, window closed, empty or unknown ids
        """
        player = self.get_player(player_id)
        chosen = _normalize_ids(answer_ids)

        session = self.store.require_session(player.session_id)
        with self.store.lock_for(session.game_id):
            session = self._live_session(player)
            question = session.current_question
            if question is None:
                raise InputError("Session has not started yet")

            now = self.clock()
            if session_remaining_time(session, now) <= 0:
                raise InputError("Can't answer question once answer is available")

            unknown = [a for a in chosen if a not in question.option_ids()]
            if unknown:
                raise InputError(f"Unknown answer ids: {unknown}")

            result = score(question, chosen)
            player.answers[session.position] = PlayerAnswerRecord(
                question_index=session.position,
                answer_ids=chosen,
                submitted_at=now,
                question_started_at=session.question_started_at,
                correct=result.correct,
                points_awarded=result.points,
            )

        logger.info(
            f"📥 {player.id} | session {session.id} | Q{session.position + 1} | answers={chosen}"
        )

    def reveal_answer(self, player_id: str) -> List[str]:
        """
        Correct option ids of the current question, once its window closed

        Raises:
            AccessError: Unknown player, or the session has ended
            InputError: No question open yet, or the window is still open
        """
        session = self._live_session(self.get_player(player_id))
        question = session.current_question
        if question is None:
            raise InputError("Session has not started yet")
        if session_remaining_time(session, self.clock()) > 0:
            raise InputError("Question time has not been completed")
        return question.correct_option_ids()

    # ==================== LIFECYCLE ====================

    def snapshot(self) -> Dict[str, Any]:
        return {"players": [p.model_dump(mode="json") for p in self._players.values()]}

    def restore(self, data: Dict[str, Any]) -> None:
        self._players = {raw["id"]: Player(**raw) for raw in data.get("players", [])}

    def clear(self) -> int:
        count = len(self._players)
        self._players.clear()
        return count


def _normalize_ids(answer_ids: Iterable[Any]) -> List[str]:
    """Deduplicate ids (keeping first-seen order) and coerce them to str"""
    if not isinstance(answer_ids, (list, tuple, set, frozenset)):
        raise InputError("Answers must be a list of option ids")

    chosen: List[str] = []
    for raw in answer_ids:
        if raw is None or isinstance(raw, (dict, list, bool)):
            raise InputError(f"Invalid answer id: {raw!r}")
        value = str(raw)
        if value not in chosen:
            chosen.append(value)

    if not chosen:
        raise InputError("Answers must be provided")
    return chosen
