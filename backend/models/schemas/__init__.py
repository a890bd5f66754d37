"""Pydantic contracts shared by the practice services and the API."""

from models.schemas.star_score import ScoreBreakdown, ScoreFlags, ScoreInput, StarScore
from models.schemas.star_rewrite import (
    RewriteLength,
    RewriteNotes,
    RewriteStructure,
    StarRewrite,
)
from models.schemas.practice_dashboard import (
    AnswerQuality,
    InterviewFocusItem,
    OrderedPracticeQuestion,
    PracticeAnswerSnapshot,
    PracticeQuestion,
    PracticeStats,
    PracticeStatus,
)

__all__ = [
    "ScoreInput",
    "ScoreBreakdown",
    "ScoreFlags",
    "StarScore",
    "RewriteStructure",
    "RewriteLength",
    "RewriteNotes",
    "StarRewrite",
    "PracticeQuestion",
    "PracticeAnswerSnapshot",
    "PracticeStatus",
    "PracticeStats",
    "OrderedPracticeQuestion",
    "AnswerQuality",
    "InterviewFocusItem",
]
