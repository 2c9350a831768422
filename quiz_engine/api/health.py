"""
Health check and system status endpoints
"""
from fastapi import APIRouter, Depends

from quiz_engine.api.deps import get_engine
from quiz_engine.engine import QuizEngine


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check(engine: QuizEngine = Depends(get_engine)):
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "Quiz Session Engine",
        "version": "1.0.0",
        "total_games": len(engine.catalog),
        "total_sessions": len(engine.store),
    }
