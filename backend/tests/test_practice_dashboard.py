from datetime import datetime, timezone

from models.schemas.practice_dashboard import PracticeAnswerSnapshot, PracticeQuestion
from services.practice_dashboard import (
    compute_practice_stats,
    derive_status,
    order_practice_questions,
)


def _ts(day: int) -> datetime:
    return datetime(2026, 1, day, 12, 0, tzinfo=timezone.utc)


QUESTIONS = [PracticeQuestion(question_key=f"q{i}", question_text=f"Question {i}") for i in range(1, 6)]

ANSWERS = {
    "q1": PracticeAnswerSnapshot(answer_text="draft", score=80, updated_at=_ts(2)),
    "q2": PracticeAnswerSnapshot(
        answer_text="draft", score=40, improved_text="better", updated_at=_ts(1)
    ),
    "q3": PracticeAnswerSnapshot(answer_text="   ", updated_at=_ts(3)),
    "q5": PracticeAnswerSnapshot(score=40, updated_at=_ts(5)),
}


def test_derive_status_missing_answer():
    status = derive_status(None)
    assert not status.drafted and not status.scored and not status.improved


def test_derive_status_rubric_counts_as_scored():
    status = derive_status(PracticeAnswerSnapshot(score=0, rubric_json={"total_score": 0}))
    assert status.scored
    assert not derive_status(PracticeAnswerSnapshot(score=0, rubric_json={})).scored


def test_compute_practice_stats():
    stats = compute_practice_stats(QUESTIONS, ANSWERS)
    assert stats.total == 5
    assert stats.drafted == 2
    assert stats.scored == 3
    assert stats.improved == 1
    assert stats.average_score == 53


def test_compute_practice_stats_rounds_half_up():
    questions = QUESTIONS[:2]
    answers = {
        "q1": PracticeAnswerSnapshot(score=3),
        "q2": PracticeAnswerSnapshot(score=4),
    }
    assert compute_practice_stats(questions, answers).average_score == 4


def test_compute_practice_stats_empty():
    stats = compute_practice_stats([], {})
    assert stats.total == 0
    assert stats.average_score == 0


def test_order_practice_questions():
    ordered = order_practice_questions(QUESTIONS, ANSWERS)
    assert [q.question_key for q in ordered] == ["q3", "q4", "q5", "q2", "q1"]
    assert ordered[1].score == 0
    assert ordered[1].updated_at is None
    assert ordered[-1].status.scored
