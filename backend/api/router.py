import logging

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.requests import (
    PracticeDashboardRequest,
    PracticeScoreRequest,
    QuestionKeyRequest,
)
from models.responses import (
    PracticeDashboardResponse,
    QuestionKeyResponse,
    RewriteResponse,
)
from models.schemas.star_score import StarScore
from services import interview_focus, practice_dashboard, star_rewriter, star_scorer

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "version": settings.app_version,
    }


@router.post("/practice/score", response_model=StarScore)
@limiter.limit(settings.rate_limit)
async def score_answer(request: Request, body: PracticeScoreRequest):
    scoring = star_scorer.score_star_answer(
        body.answer_text, body.question_text, body.signals, body.gaps
    )
    logger.info(
        "Scored practice answer: total=%d flags=%s",
        scoring.total_score,
        [name for name, on in scoring.flags.model_dump().items() if on],
    )
    return scoring


@router.post("/practice/rewrite", response_model=RewriteResponse)
@limiter.limit(settings.rate_limit)
async def rewrite_answer(request: Request, body: PracticeScoreRequest):
    answer_text = body.answer_text.strip()
    if not answer_text:
        raise HTTPException(status_code=400, detail="Add an answer before rewriting.")

    scoring = star_scorer.score_star_answer(
        answer_text, body.question_text, body.signals, body.gaps
    )
    try:
        rewrite = star_rewriter.rewrite_star_answer(
            answer_text, body.question_text, scoring.flags, body.signals, body.gaps
        )
    except Exception:
        logger.exception("STAR rewrite failed")
        raise HTTPException(status_code=500, detail="Unable to rewrite answer right now.")

    logger.info(
        "Rewrote practice answer: total=%d placeholders=%d",
        scoring.total_score,
        len(rewrite.notes.inserted_placeholders),
    )
    return RewriteResponse(
        scoring=scoring,
        improved_text=rewrite.improved_text,
        notes=rewrite.notes,
    )


@router.post("/practice/question-key", response_model=QuestionKeyResponse)
@limiter.limit(settings.rate_limit)
async def question_key(request: Request, body: QuestionKeyRequest):
    return QuestionKeyResponse(
        question_key=star_scorer.build_question_key(body.question_text, body.index)
    )


@router.post("/practice/dashboard", response_model=PracticeDashboardResponse)
@limiter.limit(settings.rate_limit)
async def dashboard(request: Request, body: PracticeDashboardRequest):
    return PracticeDashboardResponse(
        stats=practice_dashboard.compute_practice_stats(body.questions, body.answers),
        questions=practice_dashboard.order_practice_questions(body.questions, body.answers),
        focus=interview_focus.build_interview_focus(body.questions, body.answers),
    )
