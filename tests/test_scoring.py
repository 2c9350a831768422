"""
Tests for exact-set answer scoring
"""
import pytest
from pydantic import ValidationError

from quiz_engine.core.scoring import is_exact_match, score
from conftest import make_question


def test_single_correct():
    """Single choice: the one correct id scores full points"""
    q = make_question(points=100, correct=("a1",))
    result = score(q, ["a1"])
    assert result.correct is True
    assert result.points == 100


def test_single_wrong():
    """Single choice: a wrong id scores 0"""
    q = make_question(points=100, correct=("a1",))
    result = score(q, ["a2"])
    assert result.correct is False
    assert result.points == 0


def test_multiple_exact_set_any_order():
    """Multiple choice: order of chosen ids does not matter"""
    q = make_question(qtype="multiple", points=200, correct=("a1", "a3"))
    assert score(q, ["a3", "a1"]).points == 200


def test_multiple_subset_gets_nothing():
    """Multiple choice: a subset of the correct set is wrong (no partial credit)"""
    q = make_question(qtype="multiple", points=200, correct=("a1", "a3"))
    result = score(q, ["a1"])
    assert result.correct is False
    assert result.points == 0


def test_multiple_superset_gets_nothing():
    """Multiple choice: picking every option is wrong"""
    q = make_question(qtype="multiple", points=200, correct=("a1", "a3"))
    assert score(q, ["a1", "a2", "a3"]).correct is False


def test_truefalse_uses_same_rule():
    """True/false is the one-element case of the set comparison"""
    q = make_question(qtype="truefalse", points=50, correct=("a2",), n_options=2)
    assert score(q, ["a2"]).points == 50
    assert score(q, ["a1"]).points == 0


def test_zero_point_question():
    """A correct answer on a 0-point question is correct with 0 points"""
    q = make_question(points=0)
    result = score(q, ["a1"])
    assert result.correct is True
    assert result.points == 0


def test_duplicate_ids_collapse():
    """Repeated ids compare as a set"""
    assert is_exact_match(["a1", "a1"], ["a1"])


def test_empty_choice_is_wrong():
    assert score(make_question(), []).correct is False


def test_single_needs_exactly_one_correct():
    """Question validation: single with two correct options is rejected"""
    with pytest.raises(ValidationError):
        make_question(qtype="single", correct=("a1", "a2"))


def test_multiple_needs_a_correct_option():
    with pytest.raises(ValidationError):
        make_question(qtype="multiple", correct=())


def test_duration_must_be_positive():
    with pytest.raises(ValidationError):
        make_question(duration=0)
