"""Heuristic scoring of STAR (Situation/Task/Action/Result) interview answers.

Pipeline (pure, single pass, no I/O):
1. Normalize + tokenize answer and question keywords
2. Lexical cue counts (ownership verbs, result/context/task cues, metrics)
3. Five category scores (0-20 each) from cue counts and answer length
4. Relevance score (0-20) from keyword overlap with question/signals/gaps
5. Sum, apply length and placeholder penalties, clamp total to 0-100
6. Map flags to an ordered list of recommendations
"""

import math
import re
from collections.abc import Iterable

from models.schemas.star_score import ScoreBreakdown, ScoreFlags, StarScore
from services.sanitize import sanitize_inline_text
from services.star_lexicon import (
    CONTEXT_CUES,
    OWNERSHIP_VERBS,
    RESULT_CUES,
    STOPWORDS,
    TASK_CUES,
    count_matches,
    count_metrics,
    has_placeholders,
)

# Category scoring
CATEGORY_BASE = 6
CATEGORY_STEP = 4
METRICS_BASE = 8
CATEGORY_MAX = 20
SITUATION_LENGTH_THRESHOLD = 600
TASK_LENGTH_THRESHOLD = 800

# Relevance
MAX_RELEVANCE_KEYWORDS = 8
NEUTRAL_RELEVANCE = 10
LOW_RELEVANCE_BELOW = 8
MIN_TOKEN_LENGTH = 3

# Aggregate penalties
MIN_ANSWER_CHARS = 450
MAX_ANSWER_CHARS = 2200
TOO_SHORT_PENALTY = 15
TOO_LONG_PENALTY = 10
PLACEHOLDER_PENALTY = 30
VAGUE_ACTION_BELOW = 2

EMPTY_ANSWER_RECOMMENDATION = "Add a STAR answer before scoring for feedback."
DEFAULT_RECOMMENDATION = "Keep the answer structured and focused on measurable impact."

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def clamp(value: int, low: int = 0, high: int = CATEGORY_MAX) -> int:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round .5 upwards (2.5 -> 3), unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))


def normalize_text(text: str) -> str:
    """Lower-case, collapse every non-alphanumeric run to one space, trim."""
    return _NON_ALNUM_RE.sub(" ", (text or "").lower()).strip()


def _iter_tokens(normalized: str) -> Iterable[str]:
    for token in normalized.split():
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOPWORDS:
            yield token


def tokenize(text: str) -> set[str]:
    """Split normalized text into content tokens (3+ chars, no stopwords)."""
    return set(_iter_tokens(text))


def extract_keywords(values: Iterable[str]) -> list[str]:
    """Collect unique content tokens from labels, in first-seen order."""
    keywords: dict[str, None] = {}
    for value in values:
        cleaned = normalize_text(sanitize_inline_text(value or ""))
        for token in _iter_tokens(cleaned):
            keywords.setdefault(token, None)
    return list(keywords)


def length_bonus(length: int, threshold: int) -> int:
    if length > threshold * 2:
        return 6
    if length > threshold:
        return 4
    return 0


def compute_relevance_score(
    answer_text: str,
    question_text: str,
    signals: list[str],
    gaps: list[str],
) -> int:
    """Score 0-20 for how many question/signal keywords the answer mentions.

    Only the first 8 keywords set the denominator, so covering any 8 of a
    longer keyword list is a full score. No keywords at all is neutral (10).
    """
    keywords = extract_keywords([question_text, *signals, *gaps])
    if not keywords:
        return NEUTRAL_RELEVANCE

    answer_tokens = tokenize(normalize_text(answer_text))
    overlap = sum(1 for token in keywords if token in answer_tokens)
    denominator = min(MAX_RELEVANCE_KEYWORDS, len(keywords))
    return clamp(round_half_up(overlap / denominator * CATEGORY_MAX))


def build_recommendations(
    flags: ScoreFlags,
    signals: list[str] | None = None,
    gaps: list[str] | None = None,
) -> list[str]:
    """Turn flags into feedback lines, most severe first. Never empty."""
    recommendations: list[str] = []

    if flags.has_placeholders:
        recommendations.append("Replace placeholders with real outcomes and evidence.")
    if flags.too_short:
        recommendations.append(
            f"Add more context on the situation and task (aim for {MIN_ANSWER_CHARS}+ characters)."
        )
    if flags.too_long:
        recommendations.append("Trim to the most relevant actions and results for this role.")
    if flags.vague_action:
        recommendations.append("Use ownership verbs to show what you delivered personally.")
    if flags.weak_result:
        recommendations.append("Clarify the outcome and business impact.")
    if flags.missing_metrics:
        recommendations.append("Add a measurable metric (%, time saved, cost, risk reduction).")
    if flags.low_relevance:
        labels = [sanitize_inline_text(v or "") for v in [*(signals or []), *(gaps or [])]]
        focus = [label for label in labels if label][:2]
        if focus:
            recommendations.append(f"Reference role signals such as {' and '.join(focus)}.")
        else:
            recommendations.append(
                "Tie the answer back to the role signals from the job description."
            )

    if not recommendations:
        recommendations.append(DEFAULT_RECOMMENDATION)

    return recommendations


def _empty_score() -> StarScore:
    return StarScore(
        total_score=0,
        breakdown=ScoreBreakdown(),
        flags=ScoreFlags(
            missing_metrics=True,
            weak_result=True,
            vague_action=True,
            too_long=False,
            too_short=True,
            low_relevance=True,
            has_placeholders=False,
        ),
        recommendations=[EMPTY_ANSWER_RECOMMENDATION],
    )


def score_star_answer(
    answer_text: str,
    question_text: str,
    signals: list[str] | None = None,
    gaps: list[str] | None = None,
) -> StarScore:
    """Score a STAR answer against its question and the role's signals/gaps."""
    answer = (answer_text or "").strip()
    question = (question_text or "").strip()
    signals = signals or []
    gaps = gaps or []

    if not answer:
        return _empty_score()

    lower = answer.lower()
    length = len(answer)

    too_short = length < MIN_ANSWER_CHARS
    too_long = length > MAX_ANSWER_CHARS
    placeholders = has_placeholders(lower)

    metrics_count = count_metrics(answer)
    missing_metrics = metrics_count == 0

    ownership_count = count_matches(lower, OWNERSHIP_VERBS)
    result_count = count_matches(lower, RESULT_CUES)
    context_count = count_matches(lower, CONTEXT_CUES)
    task_count = count_matches(lower, TASK_CUES)

    breakdown = ScoreBreakdown(
        situation=clamp(
            CATEGORY_BASE + CATEGORY_STEP * context_count
            + length_bonus(length, SITUATION_LENGTH_THRESHOLD)
        ),
        task=clamp(
            CATEGORY_BASE + CATEGORY_STEP * task_count
            + length_bonus(length, TASK_LENGTH_THRESHOLD)
        ),
        action=clamp(CATEGORY_BASE + CATEGORY_STEP * ownership_count),
        result=clamp(
            CATEGORY_BASE + CATEGORY_STEP * result_count
            + (0 if missing_metrics else CATEGORY_STEP)
        ),
        metrics=0 if missing_metrics else clamp(METRICS_BASE + CATEGORY_STEP * metrics_count),
        relevance=compute_relevance_score(answer, question, signals, gaps),
    )

    total = (
        breakdown.situation + breakdown.task + breakdown.action
        + breakdown.result + breakdown.metrics + breakdown.relevance
    )
    if too_short:
        total -= TOO_SHORT_PENALTY
    if too_long:
        total -= TOO_LONG_PENALTY
    if placeholders:
        total -= PLACEHOLDER_PENALTY

    flags = ScoreFlags(
        missing_metrics=missing_metrics,
        weak_result=result_count == 0,
        vague_action=ownership_count < VAGUE_ACTION_BELOW,
        too_long=too_long,
        too_short=too_short,
        low_relevance=breakdown.relevance < LOW_RELEVANCE_BELOW,
        has_placeholders=placeholders,
    )

    return StarScore(
        total_score=clamp(total, 0, 100),
        breakdown=breakdown,
        flags=flags,
        recommendations=build_recommendations(flags, signals, gaps),
    )


# ---------------------------------------------------------------------------
# Question keys
# ---------------------------------------------------------------------------

_SLUG_RE = re.compile(r"[^a-z0-9]+")
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def slugify(value: str) -> str:
    return _SLUG_RE.sub("-", value.lower()).strip("-")


def hash_string(value: str) -> int:
    """Unsigned 32-bit djb2 (xor variant) over UTF-16 code units."""
    data = value.encode("utf-16-le", "surrogatepass")
    h = 5381
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h * 33) & 0xFFFFFFFF) ^ unit
    return h


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def build_question_key(question_text: str, index: int) -> str:
    """Stable key for a practice question: ``<slug>-<index>-<hash>``."""
    slug = slugify(question_text or "")[:40] or "question"
    digest = _to_base36(hash_string(f"{question_text}-{index}"))[:6]
    return f"{slug}-{index}-{digest}"
