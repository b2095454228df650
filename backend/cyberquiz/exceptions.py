"""Domain errors raised by the quiz core and its storage collaborators.

Each error carries a machine readable ``code`` and the HTTP status the API
answers with.  ``main`` installs a handler that renders them with the same
``{"code", "message"}`` envelope used by the authentication routes.
"""


class QuizError(Exception):
    """Base class for all quiz domain errors."""

    code = "quiz_error"
    status_code = 400
    default_message = "Quiz request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InsufficientQuestions(QuizError):
    code = "insufficient_questions"
    default_message = "Not enough questions are available for this difficulty"

    def __init__(self, difficulty: str, available: int, required: int):
        self.difficulty = difficulty
        self.available = available
        self.required = required
        super().__init__(
            f"Only {available} {difficulty} questions available, {required} required"
        )


class NoAnswerSelected(QuizError):
    code = "no_answer_selected"
    default_message = "Please select an answer"


class InvalidOption(QuizError):
    code = "invalid_option"
    default_message = "Answer must be one of A, B, C or D"


class AlreadyRevealed(QuizError):
    code = "already_revealed"
    status_code = 409
    default_message = "The answer to this question has already been submitted"


class AnswerNotRevealed(QuizError):
    code = "answer_not_revealed"
    status_code = 409
    default_message = "Submit an answer before moving to the next question"


class InvalidTransition(QuizError):
    code = "invalid_transition"
    status_code = 409
    default_message = "Operation not allowed in the current quiz state"


class FullscreenRequired(QuizError):
    code = "fullscreen_required"
    status_code = 409
    default_message = "This quiz must be taken in fullscreen mode"


class NotEligible(QuizError):
    code = "certificate_not_eligible"
    status_code = 403
    default_message = "A score of at least 75% is required for a certificate"


class SourceUnavailable(QuizError):
    code = "source_unavailable"
    status_code = 503
    default_message = "Failed to load questions"


class PersistenceUnavailable(QuizError):
    code = "persistence_unavailable"
    status_code = 503
    default_message = "Failed to save to the database"
