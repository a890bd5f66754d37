"""Progress tracking for the practice questions of one job application."""

from models.schemas.practice_dashboard import (
    OrderedPracticeQuestion,
    PracticeAnswerSnapshot,
    PracticeQuestion,
    PracticeStats,
    PracticeStatus,
)
from services.star_scorer import round_half_up


def derive_status(answer: PracticeAnswerSnapshot | None) -> PracticeStatus:
    if answer is None:
        return PracticeStatus()
    drafted = bool(answer.answer_text and answer.answer_text.strip())
    scored = bool(answer.score and answer.score > 0) or bool(answer.rubric_json)
    improved = bool(answer.improved_text and answer.improved_text.strip())
    return PracticeStatus(drafted=drafted, scored=scored, improved=improved)


def compute_practice_stats(
    questions: list[PracticeQuestion],
    answers: dict[str, PracticeAnswerSnapshot],
) -> PracticeStats:
    drafted = scored = improved = 0
    score_total = 0

    for question in questions:
        answer = answers.get(question.question_key)
        status = derive_status(answer)
        if status.drafted:
            drafted += 1
        if status.scored:
            scored += 1
            score_total += (answer.score or 0) if answer else 0
        if status.improved:
            improved += 1

    return PracticeStats(
        total=len(questions),
        drafted=drafted,
        scored=scored,
        improved=improved,
        average_score=round_half_up(score_total / scored) if scored else 0,
    )


def order_practice_questions(
    questions: list[PracticeQuestion],
    answers: dict[str, PracticeAnswerSnapshot],
) -> list[OrderedPracticeQuestion]:
    """Unscored questions first, then weakest score first.

    Ties go to the most recently updated answer; answers without a
    timestamp sort last.
    """
    ordered = []
    for question in questions:
        answer = answers.get(question.question_key)
        ordered.append(
            OrderedPracticeQuestion(
                **question.model_dump(),
                status=derive_status(answer),
                score=(answer.score or 0) if answer else 0,
                updated_at=answer.updated_at if answer else None,
            )
        )

    def sort_key(item: OrderedPracticeQuestion):
        updated = item.updated_at.timestamp() if item.updated_at else 0.0
        return (item.status.scored, item.score if item.status.scored else 0, -updated)

    return sorted(ordered, key=sort_key)
