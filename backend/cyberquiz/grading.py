"""Scoring, grading and certificate eligibility rules.

Everything here is a pure function of its inputs.  The quiz outcome is
always rebuilt from the answer records of a finished session rather than
from the running counter the session keeps for display.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from cyberquiz.exceptions import NotEligible

CERTIFICATE_THRESHOLD = 75

# Inclusive lower bounds, highest first.
GRADE_THRESHOLDS = [
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]
FAILING_GRADE = "F"

GRADE_MESSAGES = {
    "A+": "Outstanding! You're a Cyber Security Expert!",
    "A": "Excellent! Great cybersecurity knowledge!",
    "B": "Good job! You're cyber aware!",
    "C": "Not bad! Keep learning about cyber security!",
    "D": "You need more practice!",
    "F": "Time to brush up on cyber security basics!",
}


@dataclass(frozen=True)
class QuizOutcome:
    """Immutable result of a completed quiz session."""

    attempt_id: str
    score: int
    total_questions: int
    time_taken_seconds: int
    difficulty: str

    @property
    def percentage(self) -> int:
        return percentage(self.score, self.total_questions)


@dataclass(frozen=True)
class IssuedCertificate:
    """Certificate minted for an eligible outcome, prior to persistence."""

    certificate_id: str
    user_id: int
    username: str
    score: int
    total_questions: int
    percentage: int
    difficulty: str
    issued_at: datetime
    attempt_id: Optional[str] = None


def percentage(score: int, total: int) -> int:
    """Return ``100 * score / total`` rounded half up to an integer."""
    if total <= 0:
        return 0
    # Integer arithmetic keeps .5 boundaries exact.
    return (200 * score + total) // (2 * total)


def compute_outcome(session, finished_at: datetime) -> QuizOutcome:
    """Project a finished session's answer records into a ``QuizOutcome``."""
    score = sum(1 for record in session.answers if record.is_correct)
    elapsed = finished_at - session.started_at
    return QuizOutcome(
        attempt_id=session.attempt_id,
        score=score,
        total_questions=len(session.questions),
        time_taken_seconds=max(0, int(elapsed.total_seconds())),
        difficulty=session.difficulty,
    )


def grade_label(pct: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if pct >= threshold:
            return grade
    return FAILING_GRADE


def grade_message(grade: str) -> str:
    return GRADE_MESSAGES[grade]


def is_certificate_eligible(pct: int) -> bool:
    """Eligibility is deliberately stricter than the B grade boundary."""
    return pct >= CERTIFICATE_THRESHOLD


def new_certificate_id() -> str:
    return uuid.uuid4().hex.upper()


def issue_certificate(
    outcome: QuizOutcome,
    username: str,
    user_id: int,
    clock: Callable[[], datetime] = datetime.utcnow,
) -> IssuedCertificate:
    """Mint a certificate value for ``outcome``.

    Raises ``NotEligible`` when the outcome is below the certificate
    threshold.  Uniqueness of the generated ID is enforced by the store.
    """
    pct = outcome.percentage
    if not is_certificate_eligible(pct):
        raise NotEligible()
    return IssuedCertificate(
        certificate_id=new_certificate_id(),
        user_id=user_id,
        username=username,
        score=outcome.score,
        total_questions=outcome.total_questions,
        percentage=pct,
        difficulty=outcome.difficulty,
        issued_at=clock(),
        attempt_id=outcome.attempt_id,
    )
