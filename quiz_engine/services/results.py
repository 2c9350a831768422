"""
Results projection - leaderboard and per-question statistics

Leaderboard order (total, deterministic):
  1. score, descending
  2. total response time over correctly answered questions, ascending
  3. join order, ascending

While a question's window is still open its slots are reported as pending
and left out of every statistic, so results never leak correctness early.
"""
from typing import List, Optional, Sequence

from quiz_engine.core.timing import is_window_open
from quiz_engine.models import (
    AnswerOutcome,
    Player,
    PlayerResult,
    PlayerResults,
    QuestionStats,
    Session,
    SessionResults,
)


def _pending_index(session: Session, now: float) -> Optional[int]:
    return session.position if is_window_open(session, now) else None


def _outcomes(session: Session, player: Player, pending: Optional[int]) -> List[AnswerOutcome]:
    outcomes = []
    for idx, question in enumerate(session.questions):
        record = player.answers[idx] if idx < len(player.answers) else None
        answered = bool(record and record.answered)
        outcome = AnswerOutcome(
            question_index=idx,
            question_id=question.id,
            question_points=question.points,
            answered=answered,
        )
        if answered:
            outcome.answer_ids = list(record.answer_ids)
            outcome.submitted_at = record.submitted_at
            outcome.question_started_at = record.question_started_at
            outcome.response_time = record.response_time
        if idx == pending:
            outcome.correct = None
        elif answered:
            outcome.correct = record.correct
            outcome.points = record.points_awarded
        else:
            outcome.correct = False
        outcomes.append(outcome)
    return outcomes


def _correct_response_time(outcomes: Sequence[AnswerOutcome]) -> float:
    return sum(o.response_time or 0.0 for o in outcomes if o.correct)


class ResultsProjector:
    """Read-only aggregation over a session and its players"""

    def player_results(self, session: Session, player: Player, now: float) -> PlayerResults:
        outcomes = _outcomes(session, player, _pending_index(session, now))
        return PlayerResults(
            player_id=player.id,
            name=player.name,
            answers=outcomes,
            total_score=sum(o.points for o in outcomes),
        )

    def compute(self, session: Session, players: Sequence[Player], now: float) -> SessionResults:
        """
        Build leaderboard and statistics

        Args:
            session: Session (in progress or ended)
            players: Players of the session (any order)
            now: Current unix timestamp, decides which window is still open

        Returns:
            SessionResults (empty players / questions lists are valid)
        """
        pending = _pending_index(session, now)

        rows = []
        for player in players:
            outcomes = _outcomes(session, player, pending)
            rows.append((player, outcomes))

        rows.sort(key=lambda row: (
            -sum(o.points for o in row[1]),
            _correct_response_time(row[1]),
            row[0].join_order,
        ))

        leaderboard = []
        for rank, (player, outcomes) in enumerate(rows, start=1):
            leaderboard.append(PlayerResult(
                rank=rank,
                player_id=player.id,
                name=player.name,
                score=sum(o.points for o in outcomes),
                correct_count=sum(1 for o in outcomes if o.correct),
                total_response_time=round(_correct_response_time(outcomes), 3),
                answers=outcomes,
            ))

        question_stats = [
            self._question_stats(session, idx, rows, pending)
            for idx in range(len(session.questions))
        ]

        average_score = 0.0
        if leaderboard:
            average_score = sum(p.score for p in leaderboard) / len(leaderboard)

        return SessionResults(
            session_id=session.id,
            game_id=session.game_id,
            status=session.status,
            question_count=len(session.questions),
            max_score=sum(q.points for q in session.questions),
            players=leaderboard,
            questions=question_stats,
            average_score=round(average_score, 2),
        )

    @staticmethod
    def _question_stats(session, idx, rows, pending) -> QuestionStats:
        question = session.questions[idx]
        stats = QuestionStats(
            question_index=idx,
            question_id=question.id,
            text=question.text,
            type=question.type,
            points=question.points,
        )
        if idx == pending:
            return stats

        times = []
        for player, outcomes in rows:
            outcome = outcomes[idx]
            if not outcome.answered:
                continue
            stats.total_responses += 1
            if outcome.correct:
                stats.correct_responses += 1
            if outcome.response_time is not None:
                times.append((outcome.response_time, player.join_order, player.name))

        if stats.total_responses:
            stats.accuracy = round(stats.correct_responses / stats.total_responses, 4)
        if times:
            stats.average_response_time = round(sum(t[0] for t in times) / len(times), 3)
            fastest = min(times)
            stats.fastest_time = round(fastest[0], 3)
            stats.fastest_player = fastest[2]
        return stats
