"""
Player endpoints: join, poll, answer, reveal, results
"""
from fastapi import APIRouter, Depends

from quiz_engine.api.deps import get_engine
from quiz_engine.engine import QuizEngine
from quiz_engine.errors import InputError


router = APIRouter(prefix="/play", tags=["play"])


@router.post("/join/{session_id}")
async def join(session_id: str, payload: dict, engine: QuizEngine = Depends(get_engine)):
    """
    Join a session

    Request:
        {"name": "Ada"}
    """
    return engine.join_session(session_id, payload.get("name"))


@router.get("/{player_id}/status")
async def status(player_id: str, engine: QuizEngine = Depends(get_engine)):
    return engine.player_status(player_id)


@router.get("/{player_id}/question")
async def question(player_id: str, engine: QuizEngine = Depends(get_engine)):
    current = engine.player_question(player_id)
    return {"question": current.model_dump(mode="json")}


@router.put("/{player_id}/answer")
async def submit_answer(player_id: str, payload: dict, engine: QuizEngine = Depends(get_engine)):
    """
    Submit (or change) the answer for the open question

    Request:
        {"answers": ["a1", "a3"]}
    """
    if "answers" not in payload:
        raise InputError("answers required")
    engine.submit_player_answer(player_id, payload["answers"])
    return {}


@router.get("/{player_id}/answer")
async def correct_answer(player_id: str, engine: QuizEngine = Depends(get_engine)):
    """Correct option ids, available once the question window closed"""
    return {"answers": engine.player_correct_answer(player_id)["answerIds"]}


@router.get("/{player_id}/results")
async def results(player_id: str, engine: QuizEngine = Depends(get_engine)):
    return engine.player_results(player_id).model_dump(mode="json")
