"""
Authoritative question timing

Remaining time is always derived from the question start timestamp and
never stored, so repeated reads cannot drift apart.
"""
from typing import Optional

from quiz_engine.models import Session


def remaining_time(duration: float, started_at: Optional[float], now: float) -> float:
    """
    Remaining seconds of an answer window

    Formula: max(0, duration - (now - started_at))

    Args:
        duration: Window length (seconds)
        started_at: Unix timestamp the question opened, None if never opened
        now: Current unix timestamp

    Returns:
        Remaining time in range [0.0, duration]
    """
    if started_at is None:
        return 0.0
    elapsed = max(0.0, now - started_at)
    return max(0.0, duration - elapsed)


def session_remaining_time(session: Session, now: float) -> float:
    """Remaining time of the session's current question (0 if none is open)"""
    question = session.current_question
    if question is None or session.is_ended:
        return 0.0
    return remaining_time(question.duration, session.question_started_at, now)


def is_window_open(session: Session, now: float) -> bool:
    """True while the current question accepts submissions"""
    return session_remaining_time(session, now) > 0
