"""Scoring contract for a single STAR practice answer."""

from pydantic import BaseModel


class ScoreInput(BaseModel):
    answer_text: str = ""
    question_text: str = ""
    signals: list[str] = []  # role competencies the answer should address
    gaps: list[str] = []  # competencies with no evidence yet


class ScoreBreakdown(BaseModel):
    """Per-category sub-scores, each 0-20.

    The six categories can add up to 120; only the total is capped at 100.
    """
    situation: int = 0
    task: int = 0
    action: int = 0
    result: int = 0
    metrics: int = 0
    relevance: int = 0


class ScoreFlags(BaseModel):
    missing_metrics: bool = False
    weak_result: bool = False
    vague_action: bool = False
    too_long: bool = False
    too_short: bool = False
    low_relevance: bool = False
    has_placeholders: bool = False


class StarScore(BaseModel):
    total_score: int = 0  # 0-100
    breakdown: ScoreBreakdown = ScoreBreakdown()
    flags: ScoreFlags = ScoreFlags()
    recommendations: list[str] = []
