"""State machine for a single quiz run.

A ``QuizSession`` is created by :meth:`QuizSession.start` and walks through
``NOT_STARTED -> IN_PROGRESS -> COMPLETED`` (or ``ABORTED``).  For each
question the player selects an option, submits it, then advances.  The
session judges correctness exactly once, at submit time, and the final
``QuizOutcome`` is derived from the recorded answers.

Fullscreen state is only tracked here; enforcing it is the caller's job.
"""

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Sequence

from cyberquiz.exceptions import (
    AlreadyRevealed,
    AnswerNotRevealed,
    InsufficientQuestions,
    InvalidOption,
    InvalidTransition,
    NoAnswerSelected,
)
from cyberquiz.grading import QuizOutcome, compute_outcome

logger = logging.getLogger(__name__)

QUESTIONS_PER_QUIZ = 10
OPTIONS = ("A", "B", "C", "D")
DIFFICULTIES = ("easy", "medium", "hard")


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Question:
    id: int
    prompt: str
    options: dict  # letter -> option text
    correct_option: str
    difficulty: str


@dataclass
class AnswerRecord:
    question_id: int
    selected_option: Optional[str] = None
    is_correct: bool = False
    revealed: bool = False


@dataclass
class QuizSession:
    attempt_id: str
    difficulty: str
    questions: list
    answers: list = field(default_factory=list)
    current_index: int = 0
    started_at: Optional[datetime] = None
    fullscreen_active: bool = False
    state: SessionState = SessionState.NOT_STARTED
    running_score: int = 0
    outcome: Optional[QuizOutcome] = None
    clock: Callable[[], datetime] = datetime.utcnow

    @classmethod
    def start(
        cls,
        pool: Sequence[Question],
        difficulty: str,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
        fullscreen_active: bool = True,
    ) -> "QuizSession":
        """Sample ``QUESTIONS_PER_QUIZ`` questions of ``difficulty`` and begin.

        Raises ``InsufficientQuestions`` when the pool is too small; no
        session is created in that case.
        """
        candidates = [q for q in pool if q.difficulty == difficulty]
        if len(candidates) < QUESTIONS_PER_QUIZ:
            raise InsufficientQuestions(difficulty, len(candidates), QUESTIONS_PER_QUIZ)

        # Full uniform permutation, even when the pool is exactly the quiz size.
        (rng or random.SystemRandom()).shuffle(candidates)
        chosen = candidates[:QUESTIONS_PER_QUIZ]

        session = cls(
            attempt_id=uuid.uuid4().hex,
            difficulty=difficulty,
            questions=chosen,
            clock=clock,
            fullscreen_active=fullscreen_active,
        )
        session.answers = [AnswerRecord(question_id=chosen[0].id)]
        session.started_at = clock()
        session.state = SessionState.IN_PROGRESS
        return session

    @property
    def current_question(self) -> Optional[Question]:
        if self.state != SessionState.IN_PROGRESS:
            return None
        return self.questions[self.current_index]

    @property
    def current_record(self) -> Optional[AnswerRecord]:
        if self.state != SessionState.IN_PROGRESS:
            return None
        return self.answers[self.current_index]

    @property
    def elapsed_seconds(self) -> int:
        """Display timer; the outcome computes its own elapsed time."""
        if self.started_at is None:
            return 0
        return max(0, int((self.clock() - self.started_at).total_seconds()))

    def _require_in_progress(self, action: str) -> None:
        if self.state != SessionState.IN_PROGRESS:
            raise InvalidTransition(f"Cannot {action} while quiz is {self.state.value}")

    def set_fullscreen(self, active: bool) -> None:
        self.fullscreen_active = bool(active)

    def select_answer(self, option: str) -> None:
        self._require_in_progress("select an answer")
        record = self.answers[self.current_index]
        if record.revealed:
            raise AlreadyRevealed()
        option = (option or "").strip().upper()
        if option not in OPTIONS:
            raise InvalidOption()
        record.selected_option = option

    def submit_answer(self) -> AnswerRecord:
        self._require_in_progress("submit an answer")
        record = self.answers[self.current_index]
        if record.revealed:
            raise AlreadyRevealed()
        if record.selected_option is None:
            raise NoAnswerSelected()

        question = self.questions[self.current_index]
        correct = question.correct_option
        if correct not in OPTIONS:
            logger.warning(
                "Data integrity: question %s has malformed correct option %r; "
                "answer treated as incorrect",
                question.id,
                correct,
            )
            record.is_correct = False
        else:
            record.is_correct = record.selected_option == correct
        record.revealed = True
        if record.is_correct:
            self.running_score += 1
        return record

    def advance(self) -> Optional[QuizOutcome]:
        """Move to the next question, or finish and return the outcome."""
        self._require_in_progress("advance")
        if not self.answers[self.current_index].revealed:
            raise AnswerNotRevealed()

        if self.current_index + 1 < len(self.questions):
            self.current_index += 1
            self.answers.append(
                AnswerRecord(question_id=self.questions[self.current_index].id)
            )
            return None

        self.current_index = len(self.questions)
        self.state = SessionState.COMPLETED
        self.outcome = compute_outcome(self, self.clock())
        return self.outcome

    def abort(self) -> None:
        self._require_in_progress("abort")
        self.state = SessionState.ABORTED
