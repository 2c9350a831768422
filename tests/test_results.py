"""
Tests for leaderboard and statistics
"""
from quiz_engine.models import Player, PlayerAnswerRecord, Session, SessionState
from quiz_engine.services.results import ResultsProjector
from conftest import make_question


NOW = 1_700_000_000.0


def _session(questions, position=None):
    position = len(questions) - 1 if position is None else position
    return Session(
        id="s1",
        game_id="g1",
        owner="host",
        questions=questions,
        position=position,
        status="ENDED",
        question_started_at=NOW - 1000,
        created_at=NOW - 2000,
    )


def _player(pid, order, records):
    return Player(id=pid, name=pid, session_id="s1", joined_at=NOW, join_order=order, answers=records)


def _record(idx, correct, points, response_time=1.0, answered=True):
    if not answered:
        return PlayerAnswerRecord(question_index=idx)
    return PlayerAnswerRecord(
        question_index=idx,
        answer_ids=["a1"] if correct else ["a2"],
        submitted_at=NOW - 500 + response_time,
        question_started_at=NOW - 500,
        correct=correct,
        points_awarded=points,
    )


def test_empty_session_results():
    """No players: empty leaderboard and average 0 (never NaN)"""
    results = ResultsProjector().compute(_session([make_question()]), [], NOW)
    assert results.players == []
    assert results.average_score == 0
    assert results.questions[0].accuracy == 0
    assert results.questions[0].total_responses == 0


def test_zero_question_session():
    players = [_player("A", 0, [])]
    results = ResultsProjector().compute(_session([], position=-1), players, NOW)
    assert results.questions == []
    assert results.players[0].score == 0
    assert results.max_score == 0


def test_player_without_answers():
    questions = [make_question("q1"), make_question("q2")]
    players = [_player("A", 0, [_record(0, False, 0, answered=False), _record(1, False, 0, answered=False)])]
    results = ResultsProjector().compute(_session(questions), players, NOW)
    row = results.players[0]
    assert row.score == 0
    assert row.correct_count == 0
    assert all(o.answered is False and o.correct is False for o in row.answers)


def test_leaderboard_tie_break_is_deterministic():
    """[A:300, B:100, C:100] always ranks the same way"""
    questions = [make_question("q1", points=100), make_question("q2", points=200)]
    players = [
        _player("C", 2, [_record(0, True, 100, response_time=2.0), _record(1, False, 0)]),
        _player("B", 1, [_record(0, True, 100, response_time=2.0), _record(1, False, 0)]),
        _player("A", 0, [_record(0, True, 100), _record(1, True, 200)]),
    ]
    projector = ResultsProjector()
    orders = set()
    for _ in range(5):
        results = projector.compute(_session(questions), players, NOW)
        orders.add(tuple((p.name, p.score, p.rank) for p in results.players))
    assert orders == {(("A", 300, 1), ("B", 100, 2), ("C", 100, 3))}


def test_tie_broken_by_response_time_first():
    """Faster correct answers rank first on equal score"""
    questions = [make_question("q1", points=100)]
    players = [
        _player("Early", 0, [_record(0, True, 100, response_time=5.0)]),
        _player("Fast", 1, [_record(0, True, 100, response_time=1.0)]),
    ]
    results = ResultsProjector().compute(_session(questions), players, NOW)
    assert [p.name for p in results.players] == ["Fast", "Early"]


def test_question_accuracy_and_timing():
    questions = [make_question("q1", points=100)]
    players = [
        _player("A", 0, [_record(0, True, 100, response_time=2.0)]),
        _player("B", 1, [_record(0, False, 0, response_time=4.0)]),
        _player("C", 2, [_record(0, False, 0, answered=False)]),
    ]
    results = ResultsProjector().compute(_session(questions), players, NOW)
    stats = results.questions[0]
    assert stats.total_responses == 2
    assert stats.correct_responses == 1
    assert stats.accuracy == 0.5
    assert stats.average_response_time == 3.0
    assert stats.fastest_player == "A"
    assert results.average_score == round(100 / 3, 2)
    assert results.max_score == 100


def test_open_window_is_pending():
    """The question still accepting answers is not judged in results"""
    questions = [make_question("q1", duration=10, points=100)]
    session = _session(questions, position=0)
    session.status = SessionState.ACTIVE
    session.question_started_at = NOW - 3
    player = _player("A", 0, [_record(0, True, 100)])

    projector = ResultsProjector()
    mine = projector.player_results(session, player, NOW)
    assert mine.answers[0].correct is None
    assert mine.total_score == 0

    results = projector.compute(session, [player], NOW)
    assert results.questions[0].total_responses == 0

    closed = projector.player_results(session, player, NOW + 7)
    assert closed.answers[0].correct is True
    assert closed.total_score == 100
