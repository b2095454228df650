"""Tests for the quiz session state machine."""

import logging
import pathlib
import random
import sys
from datetime import datetime, timedelta

import pytest

# Allow importing the cyberquiz package
sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from cyberquiz.exceptions import (
    AlreadyRevealed,
    AnswerNotRevealed,
    InsufficientQuestions,
    InvalidOption,
    InvalidTransition,
    NoAnswerSelected,
)
from cyberquiz.quiz_session import Question, QuizSession, SessionState


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self):
        return self.now

    def tick(self, seconds):
        self.now += timedelta(seconds=seconds)


def _pool(count, difficulty="easy", correct="A", start_id=1):
    return [
        Question(
            id=start_id + i,
            prompt=f"Question {start_id + i}",
            options={"A": "a", "B": "b", "C": "c", "D": "d"},
            correct_option=correct,
            difficulty=difficulty,
        )
        for i in range(count)
    ]


def _answer(session, option):
    session.select_answer(option)
    record = session.submit_answer()
    session.advance()
    return record


def test_start_with_exactly_ten_uses_each_question_once():
    pool = _pool(10)
    session = QuizSession.start(pool, "easy", rng=random.Random(7))
    ids = [q.id for q in session.questions]
    assert sorted(ids) == [q.id for q in pool]
    assert len(set(ids)) == 10
    assert session.state == SessionState.IN_PROGRESS
    assert session.current_index == 0
    assert session.started_at is not None


def test_start_shuffles_even_when_selection_is_forced():
    pool = _pool(10)
    orders = {
        tuple(q.id for q in QuizSession.start(pool, "easy", rng=random.Random(seed)).questions)
        for seed in range(20)
    }
    assert len(orders) > 1


def test_start_only_samples_requested_difficulty():
    pool = _pool(12, "easy") + _pool(10, "hard", start_id=100)
    session = QuizSession.start(pool, "hard")
    assert len(session.questions) == 10
    assert all(q.difficulty == "hard" for q in session.questions)

    session = QuizSession.start(pool, "easy")
    assert len(session.questions) == 10
    assert len({q.id for q in session.questions}) == 10
    assert all(q.difficulty == "easy" for q in session.questions)


def test_start_fails_with_insufficient_questions():
    pool = _pool(20, "easy") + _pool(6, "hard", start_id=100)
    with pytest.raises(InsufficientQuestions) as excinfo:
        QuizSession.start(pool, "hard")
    assert excinfo.value.available == 6
    assert excinfo.value.required == 10


def test_reselection_before_submit_last_write_wins():
    session = QuizSession.start(_pool(10, correct="C"), "easy")
    session.select_answer("B")
    session.select_answer("C")
    record = session.submit_answer()
    assert record.selected_option == "C"
    assert record.is_correct is True
    assert record.revealed is True
    assert session.running_score == 1


def test_submit_without_selection_is_rejected():
    session = QuizSession.start(_pool(10), "easy")
    with pytest.raises(NoAnswerSelected):
        session.submit_answer()
    assert session.current_record.revealed is False


def test_second_submit_does_not_change_score():
    session = QuizSession.start(_pool(10), "easy")
    session.select_answer("A")
    session.submit_answer()
    with pytest.raises(AlreadyRevealed):
        session.submit_answer()
    assert session.running_score == 1


def test_select_after_reveal_fails_loudly():
    session = QuizSession.start(_pool(10), "easy")
    session.select_answer("B")
    session.submit_answer()
    with pytest.raises(AlreadyRevealed):
        session.select_answer("A")
    assert session.current_record.selected_option == "B"
    assert session.current_record.is_correct is False


def test_invalid_option_letter_is_rejected():
    session = QuizSession.start(_pool(10), "easy")
    with pytest.raises(InvalidOption):
        session.select_answer("E")
    session.select_answer(" b ")
    assert session.current_record.selected_option == "B"


def test_advance_requires_revealed_answer():
    session = QuizSession.start(_pool(10), "easy")
    session.select_answer("A")
    with pytest.raises(AnswerNotRevealed):
        session.advance()


def test_advance_moves_to_next_question_with_clear_selection():
    session = QuizSession.start(_pool(10), "easy")
    session.select_answer("A")
    session.submit_answer()
    assert session.advance() is None
    assert session.current_index == 1
    assert session.current_record.selected_option is None
    assert session.current_record.revealed is False
    assert all(r.revealed for r in session.answers[: session.current_index])


def test_completed_outcome_is_derived_from_records():
    clock = FakeClock()
    session = QuizSession.start(_pool(10), "easy", clock=clock)
    for i in range(10):
        clock.tick(5)
        session.select_answer("A" if i < 8 else "B")
        session.submit_answer()
        outcome = session.advance()

    assert session.state == SessionState.COMPLETED
    assert session.current_index == 10
    assert outcome is session.outcome
    assert outcome.score == 8
    assert outcome.score == sum(1 for r in session.answers if r.is_correct)
    assert outcome.total_questions == 10
    assert outcome.percentage == 80
    assert outcome.time_taken_seconds == 50
    assert outcome.difficulty == "easy"
    assert outcome.attempt_id == session.attempt_id


def test_outcome_ignores_running_counter():
    session = QuizSession.start(_pool(10), "easy")
    for _ in range(9):
        _answer(session, "A")
    session.running_score = 0
    session.select_answer("B")
    session.submit_answer()
    outcome = session.advance()
    assert outcome.score == 9


def test_operations_after_completion_are_invalid():
    session = QuizSession.start(_pool(10), "easy")
    for _ in range(10):
        _answer(session, "A")
    with pytest.raises(InvalidTransition):
        session.select_answer("A")
    with pytest.raises(InvalidTransition):
        session.advance()
    with pytest.raises(InvalidTransition):
        session.abort()


def test_malformed_correct_option_counts_as_incorrect(caplog):
    pool = _pool(9) + [
        Question(
            id=99,
            prompt="Broken",
            options={"A": "a", "B": "b", "C": "c", "D": "d"},
            correct_option="Z",
            difficulty="easy",
        )
    ]
    session = QuizSession.start(pool, "easy")
    with caplog.at_level(logging.WARNING, logger="cyberquiz.quiz_session"):
        outcome = None
        while outcome is None:
            session.select_answer("A")
            session.submit_answer()
            outcome = session.advance()
    assert outcome.score == 9
    broken = [r for r in session.answers if r.question_id == 99][0]
    assert broken.revealed is True
    assert broken.is_correct is False
    assert "Data integrity" in caplog.text


def test_abort_produces_no_outcome():
    session = QuizSession.start(_pool(10), "easy")
    _answer(session, "A")
    session.abort()
    assert session.state == SessionState.ABORTED
    assert session.outcome is None
    with pytest.raises(InvalidTransition):
        session.select_answer("A")


def test_elapsed_seconds_tracks_clock():
    clock = FakeClock()
    session = QuizSession.start(_pool(10), "easy", clock=clock)
    clock.tick(42)
    assert session.elapsed_seconds == 42


def test_fullscreen_flag_does_not_affect_grading():
    session = QuizSession.start(_pool(10), "easy", fullscreen_active=False)
    assert session.fullscreen_active is False
    session.set_fullscreen(True)
    assert session.fullscreen_active is True
    session.set_fullscreen(False)
    session.select_answer("A")
    assert session.submit_answer().is_correct is True
