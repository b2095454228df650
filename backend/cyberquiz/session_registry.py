"""In-process ownership of live quiz sessions.

Each user owns at most one in-progress ``QuizSession``.  When a session
completes or is aborted the registry drops it; for completed sessions the
outcome is retained so the result page and certificate issuance can use it.
"""

import logging
from typing import Optional

from cyberquiz.grading import QuizOutcome
from cyberquiz.quiz_session import QuizSession, SessionState

logger = logging.getLogger(__name__)


class QuizSessionRegistry:
    def __init__(self):
        self._active: dict[int, QuizSession] = {}
        self._completed: dict[int, QuizOutcome] = {}

    def begin(self, user_id: int, session: QuizSession) -> QuizSession:
        previous = self._active.get(user_id)
        if previous is not None and previous.state == SessionState.IN_PROGRESS:
            previous.abort()
            logger.info(
                "Quiz %s for user %s abandoned by a new start",
                previous.attempt_id,
                user_id,
            )
        self._active[user_id] = session
        return session

    def get(self, user_id: int) -> Optional[QuizSession]:
        return self._active.get(user_id)

    def finish(self, user_id: int, session: QuizSession) -> None:
        """Tear down a session that reached a terminal state."""
        if self._active.get(user_id) is session:
            del self._active[user_id]
        if session.state == SessionState.COMPLETED and session.outcome is not None:
            self._completed[user_id] = session.outcome

    def last_outcome(self, user_id: int) -> Optional[QuizOutcome]:
        return self._completed.get(user_id)


registry = QuizSessionRegistry()


def get_quiz_registry() -> QuizSessionRegistry:
    return registry
