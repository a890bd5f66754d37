from pydantic import BaseModel

from models.schemas.practice_dashboard import (
    InterviewFocusItem,
    OrderedPracticeQuestion,
    PracticeStats,
)
from models.schemas.star_rewrite import RewriteNotes
from models.schemas.star_score import StarScore


class RewriteResponse(BaseModel):
    scoring: StarScore = StarScore()
    improved_text: str = ""
    notes: RewriteNotes = RewriteNotes()


class QuestionKeyResponse(BaseModel):
    question_key: str


class PracticeDashboardResponse(BaseModel):
    stats: PracticeStats = PracticeStats()
    questions: list[OrderedPracticeQuestion] = []
    focus: list[InterviewFocusItem] = []
