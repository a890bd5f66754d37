"""Pick the practice questions most worth working on next.

Each answer is graded Draft/Solid/Strong from its score, word count and
whether an improved pass exists. Questions are then ranked (weakest first,
high-priority questions nudged ahead) and the top three are returned,
taking one per question source first so a mix of gaps/signals/core
questions surfaces.
"""

from models.schemas.practice_dashboard import (
    AnswerQuality,
    InterviewFocusItem,
    PracticeAnswerSnapshot,
    PracticeQuestion,
)
from services.practice_dashboard import derive_status

FOCUS_LIMIT = 3

STRONG_SCORE = 75
STRONG_LONG_SCORE = 65
STRONG_LONG_WORDS = 140
SOLID_SCORE = 55
SOLID_WORDS = 90
LOW_SCORE_BELOW = 60

PRIORITY_BUMP = {"high": -0.2, "low": 0.2}
INDEX_TIEBREAK = 0.001


def assess_answer_quality(answer: PracticeAnswerSnapshot | None) -> AnswerQuality:
    text = ((answer.improved_text or answer.answer_text or "") if answer else "").strip()
    word_count = len(text.split())
    score = (answer.score or 0) if answer else 0
    status = derive_status(answer)

    if not status.drafted:
        return AnswerQuality(
            quality="Draft", next_step="Add a first draft with STAR.",
            priority=1, drafted=False, score=score,
        )
    if score >= STRONG_SCORE or (word_count > STRONG_LONG_WORDS and score >= STRONG_LONG_SCORE):
        return AnswerQuality(
            quality="Strong", next_step="Polish metrics and timing.",
            priority=4, drafted=True, score=score,
        )
    if score >= SOLID_SCORE or word_count >= SOLID_WORDS or status.improved:
        return AnswerQuality(
            quality="Solid", next_step="Tighten impact and add a metric.",
            priority=3, drafted=True, score=score,
        )
    return AnswerQuality(
        quality="Draft", next_step="Short or low score, rewrite with STAR.",
        priority=2, drafted=True, score=score,
    )


def build_focus_reason(quality: AnswerQuality, answer: PracticeAnswerSnapshot | None) -> str:
    if not quality.drafted:
        return "No draft yet, start with a concise STAR."
    score = (answer.score or 0) if answer else 0
    if 0 < score < LOW_SCORE_BELOW:
        return "Score is low, tighten clarity and metrics."
    if not (answer and answer.improved_text):
        return "Draft saved, add an improved pass for polish."
    return "Solid baseline, refine metrics to hit strong."


def build_interview_focus(
    questions: list[PracticeQuestion],
    answers: dict[str, PracticeAnswerSnapshot],
) -> list[InterviewFocusItem]:
    """Top questions to practise next, most urgent first."""
    candidates = []
    for index, question in enumerate(questions):
        answer = answers.get(question.question_key)
        quality = assess_answer_quality(answer)
        candidates.append(
            InterviewFocusItem(
                question_key=question.question_key,
                label=question.question_text,
                reason=build_focus_reason(quality, answer),
                priority=quality.priority
                + PRIORITY_BUMP.get(question.priority, 0.0)
                + index * INDEX_TIEBREAK,
                quality=quality.quality,
                next_step=quality.next_step,
                source=question.source,
            )
        )

    candidates.sort(key=lambda item: item.priority)

    focus: list[InterviewFocusItem] = []
    # One per source first, when there is more than one source to spread across
    if len({item.source for item in candidates}) > 1:
        seen_sources = set()
        for item in candidates:
            if len(focus) >= FOCUS_LIMIT:
                break
            if item.source not in seen_sources:
                seen_sources.add(item.source)
                focus.append(item)

    chosen = {item.question_key for item in focus}
    for item in candidates:
        if len(focus) >= FOCUS_LIMIT:
            break
        if item.question_key not in chosen:
            chosen.add(item.question_key)
            focus.append(item)

    return focus
