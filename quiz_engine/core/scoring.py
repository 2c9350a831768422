"""
Quiz Scoring Engine

Rule:
  correct = set(chosen_ids) == set(correct_option_ids)
  points  = question.points if correct else 0

  - Exact set equality only (no partial credit, no subset/superset leniency)
  - single / truefalse are the one-element case of the same comparison
"""
from typing import Iterable

from quiz_engine.models import Question, Score


def is_exact_match(chosen_ids: Iterable[str], correct_ids: Iterable[str]) -> bool:
    """
    Compare two answer-id collections as sets

    Example:
        >>> is_exact_match(["b", "a"], ["a", "b"])
        True
        >>> is_exact_match(["a"], ["a", "b"])
        False
    """
    return set(chosen_ids) == set(correct_ids)


def score(question: Question, chosen_ids: Iterable[str]) -> Score:
    """
    Judge a submitted answer set against the question's correct set

    Args:
        question: Question as captured in the session
        chosen_ids: Option ids chosen by the player

    Returns:
        Score(correct, points)
    """
    correct = is_exact_match(chosen_ids, question.correct_option_ids())
    return Score(correct=correct, points=question.points if correct else 0)
