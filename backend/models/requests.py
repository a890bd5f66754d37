from pydantic import BaseModel, Field

from config import settings
from models.schemas.practice_dashboard import PracticeAnswerSnapshot, PracticeQuestion
from models.schemas.star_score import ScoreInput


class PracticeScoreRequest(ScoreInput):
    question_text: str = Field(
        ..., min_length=5, max_length=settings.max_question_chars,
        description="Interview question being answered",
    )
    answer_text: str = Field(
        "", max_length=settings.max_answer_chars, description="Free-text STAR answer"
    )
    signals: list[str] = Field(default_factory=list, description="Role signals the answer should cover")
    gaps: list[str] = Field(default_factory=list, description="Signals with no evidence yet")


class QuestionKeyRequest(BaseModel):
    question_text: str = Field(..., min_length=1, max_length=settings.max_question_chars)
    index: int = Field(..., ge=0)


class PracticeDashboardRequest(BaseModel):
    questions: list[PracticeQuestion] = []
    answers: dict[str, PracticeAnswerSnapshot] = {}
