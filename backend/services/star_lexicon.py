"""Fixed vocabularies and patterns used to score STAR interview answers.

Cue lists are matched as plain substrings of the lower-cased answer, so
multi-word phrases such as "at the time" work without tokenization.
"""

import re

# ---------------------------------------------------------------------------
# Stopwords: common English words plus interview-question filler.
# Dropped from both question keywords and answer tokens before overlap.
# ---------------------------------------------------------------------------
STOPWORDS: frozenset[str] = frozenset({
    "the", "and", "for", "with", "that", "this", "from", "into",
    "when", "where", "what", "why", "how", "who", "which", "while",
    "over", "under", "between", "across", "through", "about", "after",
    "before", "during", "than", "then", "there", "these", "those",
    "your", "you", "our", "their", "they", "them", "we", "was", "were",
    "are", "is", "be", "been", "being", "has", "have", "had", "did",
    "does", "doing", "to", "of", "in", "on", "by", "an", "a", "as", "at",
    "it", "its", "or", "but", "not", "all", "any", "some", "such", "can",
    "could", "would", "should", "will", "also", "just", "very", "more",
    "most", "other", "only", "out", "his", "her", "she",
    # Question / domain filler
    "tell", "describe", "give", "share", "walk", "time", "times",
    "role", "roles", "team", "teams", "experience", "job", "work",
    "company", "position",
})

# ---------------------------------------------------------------------------
# Cue lists
# ---------------------------------------------------------------------------
OWNERSHIP_VERBS: tuple[str, ...] = (
    "led", "delivered", "implemented", "reduced", "automated", "designed",
    "migrated", "remediated", "improved", "optimised", "optimized", "built",
    "owned", "created", "launched", "secured", "coordinated", "resolved",
    "triaged", "deployed", "streamlined", "saved",
)

RESULT_CUES: tuple[str, ...] = (
    "reduced", "increased", "improved", "improvement", "saved", "avoided",
    "prevented", "mitigated", "resolved", "achieved", "raised", "cut",
    "lowered", "recovered", "restored", "uptime", "sla", "mttr", "risk",
    "incident", "compliance",
)

CONTEXT_CUES: tuple[str, ...] = (
    "situation", "context", "background", "challenge", "when",
    "at the time", "stakeholder", "environment",
)

TASK_CUES: tuple[str, ...] = (
    "task", "goal", "objective", "responsible", "responsibility", "aim",
    "needed to", "asked to",
)

# ---------------------------------------------------------------------------
# Patterns (ASCII semantics for \d and \b so other scripts never match)
# ---------------------------------------------------------------------------
METRIC_RE = re.compile(
    r"\b\d{1,3}(?:[.,]\d{1,3})?\s*%"
    r"|\b\d+\s*percent\b"
    r"|[£$€]\s?\d+"
    r"|\b\d+(?:\.\d+)?\s*(?:ms|s|secs|seconds|min|mins|minutes|hours?|days?|weeks?|months?|years?)\b"
    r"|\b\d+\s*[km]\b",
    re.IGNORECASE | re.ASCII,
)

PLACEHOLDER_RE = re.compile(
    r"\b(?:tbd|lorem|example|needs verification|assumption|placeholder)\b"
    r"|\[[^\]]+\]",
    re.IGNORECASE | re.ASCII,
)


def count_matches(text: str, phrases: tuple[str, ...]) -> int:
    """Count how many phrases occur in text. Repeats of one phrase count once."""
    return sum(1 for phrase in phrases if phrase in text)


def count_metrics(text: str) -> int:
    """Count non-overlapping metric mentions (percentages, money, durations)."""
    return sum(1 for _ in METRIC_RE.finditer(text))


def has_placeholders(text: str) -> bool:
    return PLACEHOLDER_RE.search(text) is not None
