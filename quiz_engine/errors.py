"""
Caller-visible error kinds
"""


class QuizEngineError(Exception):
    """Base class for errors the engine reports to callers"""


class AccessError(QuizEngineError):
    """Unknown, ended or not-owned game/session/player"""


class InputError(QuizEngineError):
    """Malformed input, or an action attempted in an invalid state"""
