"""Aggregate import for all API route modules."""

from . import (
    auth,
    users,
    quiz,
    questions,
    scores,
    certificates,
    settings,
)

__all__ = [
    "auth",
    "users",
    "quiz",
    "questions",
    "scores",
    "certificates",
    "settings",
]
