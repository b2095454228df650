"""Leaderboard and personal score history."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquiz.database import get_session
from cyberquiz.auth import get_current_user
from cyberquiz.models import User
from cyberquiz.crud import top_entries, get_scores_by_user, LEADERBOARD_LIMIT
from cyberquiz.schemas import LeaderboardEntry, ScoreRead

router = APIRouter(tags=["scores"])


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def leaderboard(
    limit: int = Query(LEADERBOARD_LIMIT, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
):
    """Top scores, fastest first among equal scores."""
    return await top_entries(db, limit)


@router.get("/scores/me", response_model=list[ScoreRead])
async def my_scores(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await get_scores_by_user(db, current_user.id)
