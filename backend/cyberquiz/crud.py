"""Asynchronous CRUD helpers for the application's data models.

Each function in this module encapsulates a specific database operation
using SQLModel and SQLAlchemy.  Centralizing the logic keeps route
handlers light and makes behavior easier to test.  The quiz-facing
helpers translate storage failures into ``SourceUnavailable`` and
``PersistenceUnavailable`` so callers can treat them as non-fatal.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlalchemy import func
from cyberquiz.models import (
    User,
    QuizQuestion,
    QuizScore,
    Certificate,
    Settings,
)
from cyberquiz.auth import get_password_hash
from cyberquiz.exceptions import SourceUnavailable, PersistenceUnavailable
from cyberquiz.grading import QuizOutcome, IssuedCertificate
from cyberquiz.quiz_session import Question

logger = logging.getLogger(__name__)

LEADERBOARD_LIMIT = 20


async def get_settings(db: AsyncSession) -> Settings:
    """Fetch the singleton settings record, creating it if necessary."""
    result = await db.execute(select(Settings).where(Settings.id == 1))
    settings = result.scalar_one_or_none()
    if not settings:
        settings = Settings()
        db.add(settings)
        await db.commit()
        await db.refresh(settings)
    return settings


async def save_settings(db: AsyncSession, settings: Settings) -> Settings:
    """Persist settings changes and return the refreshed object."""

    db.add(settings)
    await db.commit()
    await db.refresh(settings)
    return settings


async def create_user(db: AsyncSession, user: User):
    """Create a new user, hashing the password if it is still plain text."""

    if not user.password_hash.startswith("$2b$"):
        user.password_hash = get_password_hash(user.password_hash)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_user_by_email(db: AsyncSession, email: str):
    """Return a user by email or ``None`` if not found."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Load a user by primary key."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_username(db: AsyncSession, user_id: int) -> str:
    """Profile lookup used when minting certificates."""
    result = await db.execute(select(User.username).where(User.id == user_id))
    return result.scalar_one_or_none() or "Participant"


def question_from_row(row: QuizQuestion) -> Question:
    return Question(
        id=row.id,
        prompt=row.question,
        options={
            "A": row.option_a,
            "B": row.option_b,
            "C": row.option_c,
            "D": row.option_d,
        },
        correct_option=(row.correct_answer or "").strip().upper(),
        difficulty=row.difficulty,
    )


async def fetch_questions(db: AsyncSession, difficulty: str) -> list[Question]:
    """Return the question pool for ``difficulty``."""
    try:
        result = await db.execute(
            select(QuizQuestion).where(QuizQuestion.difficulty == difficulty)
        )
        rows = result.scalars().all()
    except SQLAlchemyError as exc:
        logger.error("Failed to load %s questions: %s", difficulty, exc)
        raise SourceUnavailable() from exc
    return [question_from_row(r) for r in rows]


async def get_question_counts(db: AsyncSession) -> dict[str, int]:
    result = await db.execute(
        select(QuizQuestion.difficulty, func.count()).group_by(QuizQuestion.difficulty)
    )
    return {difficulty: count for difficulty, count in result.all()}


async def list_questions(
    db: AsyncSession, difficulty: str | None = None
) -> list[QuizQuestion]:
    query = select(QuizQuestion).order_by(QuizQuestion.id)
    if difficulty:
        query = query.where(QuizQuestion.difficulty == difficulty)
    result = await db.execute(query)
    return result.scalars().all()


async def get_question(db: AsyncSession, question_id: int) -> QuizQuestion | None:
    return await db.get(QuizQuestion, question_id)


async def create_question(db: AsyncSession, question: QuizQuestion) -> QuizQuestion:
    db.add(question)
    await db.commit()
    await db.refresh(question)
    return question


async def delete_question(db: AsyncSession, question: QuizQuestion) -> None:
    await db.delete(question)
    await db.commit()


async def seed_question_bank(db: AsyncSession, bank: list[dict]) -> int:
    """Insert ``bank`` if the question table is empty; return rows added."""
    result = await db.execute(select(func.count()).select_from(QuizQuestion))
    if result.scalar() > 0:
        return 0
    for entry in bank:
        db.add(QuizQuestion(**entry))
    await db.commit()
    return len(bank)


async def record_score(
    db: AsyncSession, user_id: int, outcome: QuizOutcome
) -> QuizScore:
    """Append a score row for a completed quiz."""
    row = QuizScore(
        user_id=user_id,
        attempt_id=outcome.attempt_id,
        score=outcome.score,
        total_questions=outcome.total_questions,
        percentage=outcome.percentage,
        time_taken_seconds=outcome.time_taken_seconds,
        difficulty=outcome.difficulty,
    )
    try:
        db.add(row)
        await db.commit()
        await db.refresh(row)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Failed to save score for user %s: %s", user_id, exc)
        raise PersistenceUnavailable("Failed to save score") from exc
    return row


async def get_score_for_attempt(
    db: AsyncSession, user_id: int, attempt_id: str
) -> QuizScore | None:
    result = await db.execute(
        select(QuizScore).where(
            QuizScore.user_id == user_id,
            QuizScore.attempt_id == attempt_id,
        )
    )
    return result.scalars().first()


async def get_scores_by_user(db: AsyncSession, user_id: int) -> list[QuizScore]:
    result = await db.execute(
        select(QuizScore)
        .where(QuizScore.user_id == user_id)
        .order_by(QuizScore.completed_at.desc(), QuizScore.id.desc())
    )
    return result.scalars().all()


async def top_entries(db: AsyncSession, limit: int = LEADERBOARD_LIMIT) -> list[dict]:
    """Best scores first; ties go to the faster attempt."""
    result = await db.execute(
        select(QuizScore, User.username)
        .join(User, QuizScore.user_id == User.id, isouter=True)
        .order_by(
            QuizScore.score.desc(),
            QuizScore.time_taken_seconds.asc(),
            QuizScore.id.asc(),
        )
        .limit(limit)
    )
    return [
        {
            "score": row.score,
            "total_questions": row.total_questions,
            "time_taken_seconds": row.time_taken_seconds,
            "completed_at": row.completed_at,
            "difficulty": row.difficulty,
            "username": username or "Anonymous",
        }
        for row, username in result.all()
    ]


async def save_certificate(
    db: AsyncSession, certificate: IssuedCertificate
) -> Certificate:
    row = Certificate(
        certificate_id=certificate.certificate_id,
        user_id=certificate.user_id,
        attempt_id=certificate.attempt_id,
        username=certificate.username,
        score=certificate.score,
        total_questions=certificate.total_questions,
        percentage=certificate.percentage,
        difficulty=certificate.difficulty,
        issued_at=certificate.issued_at,
    )
    try:
        db.add(row)
        await db.commit()
        await db.refresh(row)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(
            "Failed to save certificate %s: %s", certificate.certificate_id, exc
        )
        raise PersistenceUnavailable("Failed to save certificate") from exc
    return row


async def find_latest_certificate(
    db: AsyncSession, user_id: int
) -> Certificate | None:
    result = await db.execute(
        select(Certificate)
        .where(Certificate.user_id == user_id)
        .order_by(Certificate.issued_at.desc(), Certificate.id.desc())
        .limit(1)
    )
    return result.scalars().first()


async def find_certificate_for_attempt(
    db: AsyncSession, user_id: int, attempt_id: str
) -> Certificate | None:
    result = await db.execute(
        select(Certificate).where(
            Certificate.user_id == user_id,
            Certificate.attempt_id == attempt_id,
        )
    )
    return result.scalars().first()


async def find_certificate_by_id(
    db: AsyncSession, certificate_id: str
) -> Certificate | None:
    """Public lookup; store failures surface as ``PersistenceUnavailable``."""
    try:
        result = await db.execute(
            select(Certificate).where(Certificate.certificate_id == certificate_id)
        )
    except SQLAlchemyError as exc:
        raise PersistenceUnavailable("Certificate store unavailable") from exc
    return result.scalar_one_or_none()
