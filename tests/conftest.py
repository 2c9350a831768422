import pytest

from quiz_engine.catalog import InMemoryGameCatalog
from quiz_engine.engine import QuizEngine
from quiz_engine.models import AnswerOption, EngineSettings, Game, Question


class FakeClock:
    """Controllable replacement for time.time"""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def tick(self, seconds: float) -> None:
        self.now += seconds


def make_question(qid="q1", qtype="single", duration=10, points=100, correct=("a1",), n_options=3):
    options = [
        AnswerOption(id=f"a{i}", text=f"Option {i}", correct=f"a{i}" in correct)
        for i in range(1, n_options + 1)
    ]
    return Question(id=qid, text=f"Question {qid}", type=qtype, duration=duration,
                    points=points, options=options)


def make_game(game_id="g1", owner="host@example.com", questions=None):
    if questions is None:
        questions = [make_question()]
    return Game(id=game_id, name=f"Game {game_id}", owner=owner, questions=questions)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def catalog():
    return InMemoryGameCatalog([
        make_game("g1"),
        make_game("g3", questions=[
            make_question("q1", duration=10, points=100),
            make_question("q2", qtype="multiple", duration=20, points=200, correct=("a1", "a3")),
            make_question("q3", qtype="truefalse", duration=5, points=50, correct=("a2",), n_options=2),
        ]),
        make_game("empty", questions=[]),
    ])


@pytest.fixture()
def engine(catalog, clock):
    quiz = QuizEngine(catalog, EngineSettings(), clock=clock)
    yield quiz
    quiz.close()
