"""
Data models for the quiz session engine
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class QuestionType(str, Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"
    TRUEFALSE = "truefalse"


class SessionState(str, Enum):
    LOBBY = "LOBBY"
    ACTIVE = "ACTIVE"
    ENDED = "ENDED"


class AnswerOption(BaseModel):
    """One selectable answer of a question"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    text: str
    correct: bool = False


class Question(BaseModel):
    """Question definition (immutable once copied into a session)"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    text: str
    type: QuestionType = QuestionType.SINGLE
    duration: int              # seconds
    points: int = 0
    options: List[AnswerOption]
    media: Optional[str] = None  # image/video reference, never interpreted

    @field_validator("duration")
    @classmethod
    def _positive_duration(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("duration must be > 0")
        return value

    @field_validator("points")
    @classmethod
    def _non_negative_points(cls, value: int) -> int:
        if value < 0:
            raise ValueError("points must be >= 0")
        return value

    @model_validator(mode="after")
    def _check_options(self) -> "Question":
        ids = [o.id for o in self.options]
        if len(ids) < 2:
            raise ValueError(f"Question {self.id}: at least two options required")
        if len(set(ids)) != len(ids):
            raise ValueError(f"Question {self.id}: option ids must be unique")

        n_correct = sum(1 for o in self.options if o.correct)
        if self.type in (QuestionType.SINGLE, QuestionType.TRUEFALSE) and n_correct != 1:
            raise ValueError(
                f"Question {self.id}: {self.type.value} needs exactly one correct option, got {n_correct}"
            )
        if self.type == QuestionType.MULTIPLE and n_correct < 1:
            raise ValueError(f"Question {self.id}: multiple needs at least one correct option")
        return self

    def option_ids(self) -> List[str]:
        return [o.id for o in self.options]

    def correct_option_ids(self) -> List[str]:
        """Correct option ids, in option order"""
        return [o.id for o in self.options if o.correct]

    def public_view(self) -> Dict[str, Any]:
        """Question as shown to players (no correct flags)"""
        return self.model_dump(mode="json", exclude={"options": {"__all__": {"correct"}}})


class Game(BaseModel):
    """Game record as held by the catalog"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    owner: str
    questions: List[Question] = []
    active: Optional[str] = None    # id of the running session
    history: List[str] = []         # ids of past sessions


class Session(BaseModel):
    """One timed run of a game"""
    id: str
    game_id: str
    owner: str
    questions: List[Question]
    position: int = -1
    status: SessionState = SessionState.LOBBY
    question_started_at: Optional[float] = None
    player_ids: List[str] = []      # join order
    created_at: float
    ended_at: Optional[float] = None

    @property
    def is_ended(self) -> bool:
        return self.status == SessionState.ENDED

    @property
    def current_question(self) -> Optional[Question]:
        if 0 <= self.position < len(self.questions):
            return self.questions[self.position]
        return None


class PlayerAnswerRecord(BaseModel):
    """A player's submission for one question of the session"""
    question_index: int
    answer_ids: List[str] = []
    submitted_at: Optional[float] = None
    question_started_at: Optional[float] = None  # copied from the session at submit time
    correct: bool = False
    points_awarded: int = 0

    @property
    def answered(self) -> bool:
        return self.submitted_at is not None

    @property
    def response_time(self) -> Optional[float]:
        if self.submitted_at is None or self.question_started_at is None:
            return None
        return self.submitted_at - self.question_started_at


class Player(BaseModel):
    id: str
    name: str
    session_id: str
    joined_at: float
    join_order: int
    answers: List[PlayerAnswerRecord] = []


class Score(BaseModel):
    correct: bool
    points: int


# ==================== READ PROJECTIONS ====================


class SessionStatus(BaseModel):
    """Admin view of a session, safe for polling"""
    session_id: str
    game_id: str
    active: bool
    status: SessionState
    position: int
    question_count: int
    questions: List[Question]
    question_started_at: Optional[float] = None
    remaining_time: float = 0.0
    answer_available: bool = False
    players: List[str] = []


class PlayerQuestion(BaseModel):
    """Current question as served to a player"""
    question: Dict[str, Any]
    question_index: int
    question_count: int
    question_started_at: float
    remaining_time: float


class AnswerOutcome(BaseModel):
    """Per-question outcome for one player"""
    question_index: int
    question_id: str
    answer_ids: List[str] = []
    answered: bool = False
    correct: Optional[bool] = None   # None while the question window is still open
    points: int = 0
    question_points: int = 0
    submitted_at: Optional[float] = None
    question_started_at: Optional[float] = None
    response_time: Optional[float] = None


class PlayerResult(BaseModel):
    """Leaderboard entry"""
    rank: int
    player_id: str
    name: str
    score: int
    correct_count: int
    total_response_time: float
    answers: List[AnswerOutcome]


class PlayerResults(BaseModel):
    player_id: str
    name: str
    answers: List[AnswerOutcome]
    total_score: int


class QuestionStats(BaseModel):
    question_index: int
    question_id: str
    text: str
    type: QuestionType
    points: int
    total_responses: int = 0
    correct_responses: int = 0
    accuracy: float = 0.0
    average_response_time: float = 0.0
    fastest_player: Optional[str] = None
    fastest_time: Optional[float] = None


class SessionResults(BaseModel):
    session_id: str
    game_id: str
    status: SessionState
    question_count: int
    max_score: int
    players: List[PlayerResult] = []
    questions: List[QuestionStats] = []
    average_score: float = 0.0


class EngineSettings(BaseModel):
    """Runtime settings, loaded from YAML"""
    games_path: str = "data/games.yaml"
    allow_late_join: bool = True      # join after the first question opened
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
