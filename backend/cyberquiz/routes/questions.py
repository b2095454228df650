"""Admin endpoints for maintaining the question bank."""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquiz.database import get_session
from cyberquiz.models import User, QuizQuestion
from cyberquiz.auth import require_role
from cyberquiz.schemas import QuestionCreate, QuestionRead
from cyberquiz.schemas.question import Difficulty
from cyberquiz.crud import (
    list_questions,
    create_question,
    get_question,
    delete_question,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("/", response_model=list[QuestionRead])
async def read_questions(
    difficulty: Difficulty | None = None,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role("admin")),
):
    return await list_questions(db, difficulty)


@router.post("/", response_model=QuestionRead)
async def add_question(
    data: QuestionCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role("admin")),
):
    question = await create_question(db, QuizQuestion(**data.model_dump()))
    logger.info("Question %s added by user %s", question.id, current_user.id)
    return question


@router.delete("/{question_id}")
async def remove_question(
    question_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role("admin")),
):
    question = await get_question(db, question_id)
    if not question:
        raise HTTPException(
            status_code=404,
            detail={"code": "question_not_found", "message": "Question not found"},
        )
    await delete_question(db, question)
    logger.info("Question %s deleted by user %s", question_id, current_user.id)
    return {"message": "Question deleted"}
