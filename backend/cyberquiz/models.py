"""Database models used by the Cyber Awareness Quiz.

The models are defined with SQLModel (built on SQLAlchemy and Pydantic)
and represent players, the question bank, completed quiz scores and the
certificates issued for them.  Comments are kept concise to avoid
distracting from the field definitions.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import SQLModel, Field, Relationship


class User(SQLModel, table=True):
    """Registered quiz player or administrator."""
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str
    email: str = Field(unique=True, index=True)
    password_hash: str
    role: str = "player"  # 'player' or 'admin'
    created_at: datetime = Field(default_factory=datetime.utcnow)

    scores: List["QuizScore"] = Relationship(back_populates="user")


class QuizQuestion(SQLModel, table=True):
    """Multiple choice question with four lettered options."""
    id: Optional[int] = Field(default=None, primary_key=True)
    question: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_answer: str  # 'A', 'B', 'C' or 'D'
    difficulty: str = Field(default="easy", index=True)  # easy, medium, hard
    created_at: datetime = Field(default_factory=datetime.utcnow)


class QuizScore(SQLModel, table=True):
    """Append-only record of one completed quiz attempt."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    attempt_id: str = Field(index=True)
    score: int
    total_questions: int
    percentage: int
    time_taken_seconds: int
    difficulty: str
    completed_at: datetime = Field(default_factory=datetime.utcnow)

    user: Optional[User] = Relationship(back_populates="scores")


class Certificate(SQLModel, table=True):
    """Publicly verifiable certificate of achievement."""
    id: Optional[int] = Field(default=None, primary_key=True)
    certificate_id: str = Field(unique=True, index=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    attempt_id: Optional[str] = Field(default=None, index=True)
    username: str
    score: int
    total_questions: int
    percentage: int
    difficulty: str
    issued_at: datetime = Field(default_factory=datetime.utcnow)


class Settings(SQLModel, table=True):
    """Singleton table storing site‑wide configuration values."""
    id: Optional[int] = Field(default=1, primary_key=True)
    site_name: str = "Cyber Awareness Quiz"
    # 'per_attempt' mints one certificate per eligible attempt,
    # 'per_user' keeps reusing the user's latest certificate.
    certificate_policy: str = "per_attempt"
    verify_base_url: str = "http://localhost:5173/verify"
    public_registration_disabled: bool = False
