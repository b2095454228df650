"""Convenience imports for all schema classes used by the API."""

from .user import UserCreate, UserResponse, UserLogin
from .settings import SettingsRead, SettingsUpdate
from .question import QuestionCreate, QuestionRead
from .quiz import (
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
    ScoreRead,
    LeaderboardEntry,
)
from .certificate import CertificateRead, CertificateIssued

__all__ = [
    "UserCreate",
    "UserResponse",
    "UserLogin",
    "SettingsRead",
    "SettingsUpdate",
    "QuestionCreate",
    "QuestionRead",
    "QuizStart",
    "AnswerSelect",
    "FullscreenUpdate",
    "DifficultyRead",
    "QuestionView",
    "AnswerView",
    "SessionView",
    "OutcomeRead",
    "QuizResultRead",
    "AdvanceResponse",
    "ScoreRead",
    "LeaderboardEntry",
    "CertificateRead",
    "CertificateIssued",
]
