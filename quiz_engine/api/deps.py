"""
Shared router dependencies
"""
from typing import Optional

from fastapi import Header, Request

from quiz_engine.engine import QuizEngine


def get_engine(request: Request) -> QuizEngine:
    """Engine built by the application lifespan"""
    return request.app.state.engine


def get_owner(x_owner: Optional[str] = Header(default=None, alias="X-Owner")) -> Optional[str]:
    """Optional admin identity; when sent it must own the game/session"""
    return x_owner
