"""Schemas for the quiz session flow, results and leaderboard."""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from .question import Difficulty


class QuizStart(BaseModel):
    difficulty: Difficulty = "easy"
    fullscreen: bool = False


class AnswerSelect(BaseModel):
    option: str


class FullscreenUpdate(BaseModel):
    active: bool


class DifficultyRead(BaseModel):
    difficulty: str
    available: int
    playable: bool


class QuestionView(BaseModel):
    id: int
    prompt: str
    options: dict[str, str]


class AnswerView(BaseModel):
    question_id: int
    selected_option: Optional[str] = None
    revealed: bool = False
    # only filled in once the answer is revealed
    is_correct: Optional[bool] = None
    correct_option: Optional[str] = None


class SessionView(BaseModel):
    attempt_id: str
    state: str
    difficulty: str
    current_index: int
    total_questions: int
    running_score: int
    elapsed_seconds: int
    fullscreen_active: bool
    question: Optional[QuestionView] = None
    answer: Optional[AnswerView] = None


class OutcomeRead(BaseModel):
    attempt_id: str
    score: int
    total_questions: int
    percentage: int
    time_taken_seconds: int
    difficulty: str


class QuizResultRead(BaseModel):
    outcome: OutcomeRead
    grade: str
    message: str
    certificate_eligible: bool
    saved: bool = False
    score_id: Optional[int] = None


class AdvanceResponse(BaseModel):
    completed: bool
    session: Optional[SessionView] = None
    result: Optional[QuizResultRead] = None


class ScoreRead(BaseModel):
    id: int
    score: int
    total_questions: int
    percentage: int
    time_taken_seconds: int
    difficulty: str
    completed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LeaderboardEntry(BaseModel):
    username: str
    score: int
    total_questions: int
    time_taken_seconds: int
    difficulty: str
    completed_at: datetime
