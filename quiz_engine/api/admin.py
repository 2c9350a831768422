"""
Admin endpoints for session management
"""
from typing import Optional

from fastapi import APIRouter, Depends

from quiz_engine.api.deps import get_engine, get_owner
from quiz_engine.engine import QuizEngine
from quiz_engine.errors import InputError


router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/game/{game_id}/mutate")
async def mutate_game(
    game_id: str,
    request: dict,
    engine: QuizEngine = Depends(get_engine),
    owner: Optional[str] = Depends(get_owner),
):
    """
    Admin: Start, advance or end the session of a game

    Request:
        {"mutationType": "START" | "ADVANCE" | "END"}

    Response:
        {"data": {"sessionId": "..."}}          # START
        {"data": {"status": "ACTIVE", "position": 0}}  # ADVANCE / END
    """
    mutation_type = str(request.get("mutationType") or request.get("mutation_type") or "").upper()

    if mutation_type == "START":
        data = engine.start_session(game_id, owner)
        return {"data": data}

    if mutation_type == "ADVANCE":
        session = engine.advance_session(game_id, owner)
    elif mutation_type == "END":
        session = engine.end_session(game_id, owner)
    else:
        raise InputError("mutationType must be one of START, ADVANCE, END")

    return {
        "data": {
            "sessionId": session.id,
            "status": session.status.value,
            "position": session.position,
        }
    }


@router.get("/session/{session_id}/status")
async def session_status(
    session_id: str,
    engine: QuizEngine = Depends(get_engine),
    owner: Optional[str] = Depends(get_owner),
):
    """Admin: Poll session state (position, timing, players)"""
    status = engine.session_status(session_id, owner)
    return {"results": status.model_dump(mode="json")}


@router.get("/session/{session_id}/results")
async def session_results(
    session_id: str,
    engine: QuizEngine = Depends(get_engine),
    owner: Optional[str] = Depends(get_owner),
):
    """Admin: Leaderboard and per-question statistics"""
    results = engine.session_results(session_id, owner)
    return {"results": results.model_dump(mode="json")}
