"""Schemas for managing the question bank."""

from typing import Literal
from pydantic import BaseModel, ConfigDict

Difficulty = Literal["easy", "medium", "hard"]
OptionLetter = Literal["A", "B", "C", "D"]


class QuestionCreate(BaseModel):
    question: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_answer: OptionLetter
    difficulty: Difficulty = "easy"


class QuestionRead(QuestionCreate):
    id: int
    # stored rows may predate validation
    correct_answer: str

    model_config = ConfigDict(from_attributes=True)
