"""Practice progress across the interview questions of one application."""

from datetime import datetime

from pydantic import BaseModel


class PracticeQuestion(BaseModel):
    question_key: str
    question_text: str
    priority: str = "medium"  # high / medium / low
    source: str | None = None  # gap / signal / core


class PracticeAnswerSnapshot(BaseModel):
    """Stored state of one practice answer, as the caller persisted it."""
    answer_text: str | None = None
    score: int | None = None
    rubric_json: dict | None = None
    improved_text: str | None = None
    updated_at: datetime | None = None


class PracticeStatus(BaseModel):
    drafted: bool = False
    scored: bool = False
    improved: bool = False


class PracticeStats(BaseModel):
    total: int = 0
    drafted: int = 0
    scored: int = 0
    improved: int = 0
    average_score: int = 0


class OrderedPracticeQuestion(PracticeQuestion):
    status: PracticeStatus = PracticeStatus()
    score: int = 0
    updated_at: datetime | None = None


class AnswerQuality(BaseModel):
    quality: str = "Draft"  # Draft / Solid / Strong
    next_step: str = ""
    priority: int = 1  # lower is more urgent
    drafted: bool = False
    score: int = 0


class InterviewFocusItem(BaseModel):
    question_key: str
    label: str
    reason: str
    priority: float
    quality: str
    next_step: str
    source: str | None = None
