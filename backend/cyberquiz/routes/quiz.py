"""Endpoints driving a player's quiz session.

The session lives in the ``QuizSessionRegistry``; these handlers only look
it up, enforce the fullscreen guard and translate state changes into
responses.  State machine violations raise ``QuizError`` subclasses which
the application-level handler renders.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquiz.database import get_session
from cyberquiz.auth import get_current_user
from cyberquiz.models import User
from cyberquiz.crud import (
    fetch_questions,
    get_question_counts,
    record_score,
    get_score_for_attempt,
)
from cyberquiz.exceptions import FullscreenRequired, PersistenceUnavailable
from cyberquiz.grading import (
    QuizOutcome,
    grade_label,
    grade_message,
    is_certificate_eligible,
)
from cyberquiz.quiz_session import (
    DIFFICULTIES,
    QUESTIONS_PER_QUIZ,
    QuizSession,
    SessionState,
)
from cyberquiz.session_registry import QuizSessionRegistry, get_quiz_registry
from cyberquiz.schemas import (
    QuizStart,
    AnswerSelect,
    FullscreenUpdate,
    DifficultyRead,
    QuestionView,
    AnswerView,
    SessionView,
    OutcomeRead,
    QuizResultRead,
    AdvanceResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quiz", tags=["quiz"])


def session_view(session: QuizSession) -> SessionView:
    view = SessionView(
        attempt_id=session.attempt_id,
        state=session.state.value,
        difficulty=session.difficulty,
        current_index=session.current_index,
        total_questions=len(session.questions),
        running_score=session.running_score,
        elapsed_seconds=session.elapsed_seconds,
        fullscreen_active=session.fullscreen_active,
    )
    question = session.current_question
    record = session.current_record
    if question is not None:
        view.question = QuestionView(
            id=question.id, prompt=question.prompt, options=question.options
        )
        view.answer = AnswerView(
            question_id=record.question_id,
            selected_option=record.selected_option,
            revealed=record.revealed,
        )
        if record.revealed:
            view.answer.is_correct = record.is_correct
            view.answer.correct_option = question.correct_option
    return view


def quiz_result(
    outcome: QuizOutcome, saved: bool, score_id: int | None = None
) -> QuizResultRead:
    pct = outcome.percentage
    grade = grade_label(pct)
    return QuizResultRead(
        outcome=OutcomeRead(
            attempt_id=outcome.attempt_id,
            score=outcome.score,
            total_questions=outcome.total_questions,
            percentage=pct,
            time_taken_seconds=outcome.time_taken_seconds,
            difficulty=outcome.difficulty,
        ),
        grade=grade,
        message=grade_message(grade),
        certificate_eligible=is_certificate_eligible(pct),
        saved=saved,
        score_id=score_id,
    )


def _active_session(quizzes: QuizSessionRegistry, user: User) -> QuizSession:
    session = quizzes.get(user.id)
    if session is None or session.state != SessionState.IN_PROGRESS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "no_active_quiz", "message": "No quiz in progress"},
        )
    return session


def _require_fullscreen(session: QuizSession) -> None:
    if not session.fullscreen_active:
        raise FullscreenRequired()


@router.get("/difficulties", response_model=list[DifficultyRead])
async def list_difficulties(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    counts = await get_question_counts(db)
    return [
        DifficultyRead(
            difficulty=d,
            available=counts.get(d, 0),
            playable=counts.get(d, 0) >= QUESTIONS_PER_QUIZ,
        )
        for d in DIFFICULTIES
    ]


@router.post("/start", response_model=SessionView)
async def start_quiz(
    data: QuizStart,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
    quizzes: QuizSessionRegistry = Depends(get_quiz_registry),
):
    """Sample a new set of questions; fullscreen must already be active."""
    if not data.fullscreen:
        raise FullscreenRequired()
    pool = await fetch_questions(db, data.difficulty)
    session = QuizSession.start(pool, data.difficulty)
    quizzes.begin(current_user.id, session)
    logger.info(
        "User %s started %s quiz %s",
        current_user.id,
        data.difficulty,
        session.attempt_id,
    )
    return session_view(session)


@router.get("/session", response_model=SessionView)
async def read_session(
    current_user: User = Depends(get_current_user),
    quizzes: QuizSessionRegistry = Depends(get_quiz_registry),
):
    return session_view(_active_session(quizzes, current_user))


@router.post("/session/fullscreen", response_model=SessionView)
async def update_fullscreen(
    data: FullscreenUpdate,
    current_user: User = Depends(get_current_user),
    quizzes: QuizSessionRegistry = Depends(get_quiz_registry),
):
    session = _active_session(quizzes, current_user)
    session.set_fullscreen(data.active)
    if not data.active:
        logger.info("Quiz %s left fullscreen", session.attempt_id)
    return session_view(session)


@router.post("/session/select", response_model=SessionView)
async def select_answer(
    data: AnswerSelect,
    current_user: User = Depends(get_current_user),
    quizzes: QuizSessionRegistry = Depends(get_quiz_registry),
):
    session = _active_session(quizzes, current_user)
    _require_fullscreen(session)
    session.select_answer(data.option)
    return session_view(session)


@router.post("/session/submit", response_model=SessionView)
async def submit_answer(
    current_user: User = Depends(get_current_user),
    quizzes: QuizSessionRegistry = Depends(get_quiz_registry),
):
    session = _active_session(quizzes, current_user)
    _require_fullscreen(session)
    session.submit_answer()
    return session_view(session)


@router.post("/session/advance", response_model=AdvanceResponse)
async def advance(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
    quizzes: QuizSessionRegistry = Depends(get_quiz_registry),
):
    """Go to the next question, or finish the quiz and save the score."""
    session = _active_session(quizzes, current_user)
    _require_fullscreen(session)
    outcome = session.advance()
    if outcome is None:
        return AdvanceResponse(completed=False, session=session_view(session))

    quizzes.finish(current_user.id, session)
    logger.info(
        "User %s completed quiz %s with %s/%s",
        current_user.id,
        outcome.attempt_id,
        outcome.score,
        outcome.total_questions,
    )
    # A failed save does not undo completion; the result is still returned.
    try:
        row = await record_score(db, current_user.id, outcome)
    except PersistenceUnavailable:
        return AdvanceResponse(completed=True, result=quiz_result(outcome, saved=False))
    return AdvanceResponse(
        completed=True, result=quiz_result(outcome, saved=True, score_id=row.id)
    )


@router.post("/session/abort")
async def abort_quiz(
    current_user: User = Depends(get_current_user),
    quizzes: QuizSessionRegistry = Depends(get_quiz_registry),
):
    session = _active_session(quizzes, current_user)
    session.abort()
    quizzes.finish(current_user.id, session)
    logger.info("User %s aborted quiz %s", current_user.id, session.attempt_id)
    return {"attempt_id": session.attempt_id, "state": session.state.value}


@router.get("/result", response_model=QuizResultRead)
async def last_result(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
    quizzes: QuizSessionRegistry = Depends(get_quiz_registry),
):
    """Result of the caller's most recently completed quiz."""
    outcome = quizzes.last_outcome(current_user.id)
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "no_completed_quiz", "message": "No completed quiz"},
        )
    row = await get_score_for_attempt(db, current_user.id, outcome.attempt_id)
    return quiz_result(outcome, saved=row is not None, score_id=row.id if row else None)
