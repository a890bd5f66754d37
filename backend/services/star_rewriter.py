"""Deterministic STAR restructuring of a practice answer.

Reorganises free text into Situation/Task/Action/Result/Metrics sections,
strengthens weak verbs, and inserts [X]/[Y] placeholders where the scorer
flagged missing outcomes or metrics. Facts from the answer (tools, figures,
timelines) are carried over, never invented.
"""

import logging
import re

from models.schemas.star_rewrite import (
    RewriteLength,
    RewriteNotes,
    RewriteStructure,
    StarRewrite,
)
from models.schemas.star_score import ScoreFlags
from services.sanitize import sanitize_inline_text
from services.star_lexicon import METRIC_RE

logger = logging.getLogger(__name__)

SECTION_TITLES: dict[str, str] = {
    "situation": "Situation",
    "task": "Task",
    "action": "Action",
    "result": "Result",
    "metrics": "Metrics",
}

WEAK_VERB_MAP: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\bhelped\b", re.IGNORECASE), "delivered"),
    (re.compile(r"\bworked on\b", re.IGNORECASE), "implemented"),
    (re.compile(r"\bresponsible for\b", re.IGNORECASE), "owned"),
    (re.compile(r"\bparticipated in\b", re.IGNORECASE), "delivered"),
    (re.compile(r"\bassisted with\b", re.IGNORECASE), "delivered"),
    (re.compile(r"\bsupported\b", re.IGNORECASE), "delivered"),
]

SECURITY_TERMS: tuple[str, ...] = (
    "siem", "splunk", "sentinel", "qradar", "incident", "vulnerability",
    "patch", "firewall", "zero trust", "segmentation", "cab", "itil",
    "mttr", "sla", "iam",
)

DELIVERY_TERMS: tuple[str, ...] = (
    "delivery", "programme", "program", "project", "stakeholder",
    "governance", "change", "risk", "ops", "operations", "service",
    "customer",
)

TOOL_TERMS: tuple[str, ...] = (
    "azure", "aws", "gcp", "splunk", "sentinel", "qradar", "siem",
    "kubernetes", "terraform", "ansible", "cisco", "palo alto", "fortinet",
    "okta", "servicenow", "jira", "confluence", "intune", "m365",
)

SECURITY_METRIC_PLACEHOLDERS = [
    "Reduced incident response time by [X]% and improved MTTR to [Y] mins.",
    "Closed [X] critical vulnerabilities within [Y] days.",
    "Cut high-risk firewall exceptions by [X]% within [Y] weeks.",
    "Improved SLA compliance to [X]% and reduced repeat incidents by [Y]%.",
]

DELIVERY_METRIC_PLACEHOLDERS = [
    "Delivered the programme [X]% ahead of plan while maintaining quality.",
    "Reduced cycle time by [X]% and improved on-time delivery to [Y]%.",
    "Cut handover delays by [X]% and raised stakeholder satisfaction to [Y]%.",
    "Removed [X] hours per week through streamlined workflows.",
]

GENERIC_METRIC_PLACEHOLDERS = [
    "Improved performance by [X]% within [Y] weeks.",
    "Reduced cost or risk by [X]% and delivered [Y] measurable outcomes.",
    "Saved [X] hours per week through process improvements.",
    "Improved service quality to [X]% and reduced defects by [Y]%.",
]

MAX_COMPRESSED_LINES = 4
MAX_COMPRESSED_LINE_CHARS = 400

_DISALLOWED_PLACEHOLDER_RE = re.compile(
    r"\b(?:tbd|lorem|example|needs verification|assumption|placeholder)\b",
    re.IGNORECASE,
)
# Any bracketed span except the [X]/[Y]/[Z] slots this module inserts
_UNSAFE_BRACKET_RE = re.compile(r"\[(?![XYZ]\])[^\[\]]+\]")
_FILL_SLOT_RE = re.compile(r"\[(?:X|Y|Z)\]", re.IGNORECASE)
_HEADING_RE = re.compile(
    r"^\s*(Situation|Task|Action|Result|Metrics)\s*[:\-]\s*(.*)$", re.IGNORECASE
)
_BULLET_PREFIX_RE = re.compile(r"^[\-•*]\s*")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")
_TIMELINE_RE = re.compile(r"\b\d{1,2}\s*(?:days?|weeks?|months?|years?)\b", re.IGNORECASE | re.ASCII)

_RESULT_CUE_RE = re.compile(
    r"\b(?:reduced|increased|improved|saved|achieved|cut|lowered|uptime|sla|mttr|risk)\b",
    re.IGNORECASE,
)
_CONTEXT_CUE_RE = re.compile(
    r"\b(?:situation|context|background|challenge|stakeholder|environment|when)\b",
    re.IGNORECASE,
)
_TASK_CUE_RE = re.compile(
    r"\b(?:task|goal|objective|responsible|responsibility|aim|needed to|asked to)\b",
    re.IGNORECASE,
)
_OWNERSHIP_RE = re.compile(
    r"\b(?:led|delivered|implemented|reduced|automated|designed|migrated|remediated"
    r"|improved|owned|created|launched|secured|coordinated|resolved|triaged|deployed"
    r"|streamlined|saved)\b",
    re.IGNORECASE,
)


def _strip_unsafe_placeholders(text: str) -> str:
    cleaned = _DISALLOWED_PLACEHOLDER_RE.sub("", text)
    cleaned = _UNSAFE_BRACKET_RE.sub("", cleaned)
    return _MULTI_SPACE_RE.sub(" ", cleaned).strip()


def _uniq(values: list[str]) -> list[str]:
    """De-duplicate case-insensitively, keeping the first spelling."""
    seen: set[str] = set()
    result = []
    for value in values:
        key = value.lower()
        if key not in seen:
            seen.add(key)
            result.append(value)
    return result


def _title_case(value: str) -> str:
    return " ".join(part[:1].upper() + part[1:] for part in value.split())


def split_sentences(text: str) -> list[str]:
    normalized = re.sub(r"\s+", " ", text).strip()
    if not normalized:
        return []
    return _SENTENCE_SPLIT_RE.split(normalized)


def _clean_lines(lines: list[str]) -> list[str]:
    cleaned = []
    for line in lines:
        line = sanitize_inline_text(_strip_unsafe_placeholders(line))
        line = _BULLET_PREFIX_RE.sub("", line)
        line = _MULTI_SPACE_RE.sub(" ", line).strip()
        if line:
            cleaned.append(line)
    return cleaned


def _strengthen_verbs(text: str) -> str:
    for pattern, replacement in WEAK_VERB_MAP:
        text = pattern.sub(replacement, text)
    return text


def _strengthen(lines: list[str]) -> list[str]:
    return [_strengthen_verbs(line) for line in lines]


def _compress(lines: list[str], should_compress: bool) -> list[str]:
    if not should_compress:
        return lines
    return [
        line if len(line) <= MAX_COMPRESSED_LINE_CHARS
        else f"{line[:MAX_COMPRESSED_LINE_CHARS - 3]}..."
        for line in lines[:MAX_COMPRESSED_LINES]
    ]


def extract_timelines(text: str) -> list[str]:
    return _uniq([m.group(0).lower() for m in _TIMELINE_RE.finditer(text)])


def extract_key_details(answer_text: str) -> dict[str, list[str]]:
    """Pull tools, metric figures and timelines out of an answer."""
    lower = answer_text.lower()
    tools = [term for term in TOOL_TERMS if term in lower]
    metrics = list(dict.fromkeys(m.group(0) for m in METRIC_RE.finditer(answer_text)))
    return {
        "tools": _uniq([_title_case(term) for term in tools]),
        "metrics": metrics,
        "timelines": extract_timelines(answer_text),
    }


def parse_star_sections(text: str) -> tuple[dict[str, list[str]], bool]:
    """Split text on ``Situation:``-style headings.

    Returns (lines per section, whether any heading was found). Lines before
    the first heading are ignored.
    """
    sections: dict[str, list[str]] = {key: [] for key in SECTION_TITLES}
    current: str | None = None
    has_headings = False

    for line in re.split(r"\r?\n", text):
        match = _HEADING_RE.match(line)
        if match:
            current = match.group(1).lower()
            has_headings = True
            remainder = (match.group(2) or "").strip()
            if remainder:
                sections[current].append(remainder)
            continue
        if current:
            sections[current].append(line)

    return sections, has_headings


def _section_lines(raw_lines: list[str], fallback: list[str], default_line: str) -> list[str]:
    cleaned = _clean_lines(raw_lines)
    if cleaned:
        return cleaned
    cleaned = _clean_lines(fallback)
    if cleaned:
        return cleaned
    return [default_line]


def select_metric_placeholders(context: str) -> list[str]:
    lower = context.lower()
    if any(term in lower for term in SECURITY_TERMS):
        return list(SECURITY_METRIC_PLACEHOLDERS)
    if any(term in lower for term in DELIVERY_TERMS):
        return list(DELIVERY_METRIC_PLACEHOLDERS)
    return list(GENERIC_METRIC_PLACEHOLDERS)


def _metric_sentences(text: str) -> list[str]:
    return _clean_lines([s for s in split_sentences(text) if METRIC_RE.search(s)])


def _metrics_section(
    raw_lines: list[str],
    answer_text: str,
    flags: ScoreFlags,
    signals: list[str],
    gaps: list[str],
) -> list[str]:
    cleaned = _clean_lines(raw_lines)
    if cleaned:
        return cleaned

    metrics = _metric_sentences(answer_text)
    if flags.missing_metrics or not metrics:
        placeholders = select_metric_placeholders(" ".join([*signals, *gaps]))
        needed = 3 if flags.missing_metrics else 2
        metrics.extend(placeholders[:needed])

    return metrics or ["Add 1-2 metrics to quantify the impact."]


def _action_with_details(lines: list[str], details: dict[str, list[str]]) -> list[str]:
    updated = list(lines)
    if details["tools"]:
        updated.append(f"Tools: {', '.join(details['tools'])}.")
    if details["timelines"]:
        updated.append(f"Timeline: {', '.join(details['timelines'])}.")
    if not _OWNERSHIP_RE.search(" ".join(updated)):
        updated.insert(0, "I led the delivery, coordinating stakeholders and execution.")
    return updated


def build_sections(
    sections_from_answer: dict[str, list[str]],
    answer_text: str,
    flags: ScoreFlags,
    signals: list[str],
    gaps: list[str],
) -> dict[str, list[str]]:
    sentences = split_sentences(_strip_unsafe_placeholders(answer_text))
    context_sentences = [s for s in sentences if _CONTEXT_CUE_RE.search(s)]
    task_sentences = [s for s in sentences if _TASK_CUE_RE.search(s)]
    result_sentences = [s for s in sentences if _RESULT_CUE_RE.search(s)]
    details = extract_key_details(answer_text)

    situation = _section_lines(
        sections_from_answer["situation"],
        context_sentences or sentences[0:2],
        "Context: add the situation, stakeholders, and constraints.",
    )
    task = _section_lines(
        sections_from_answer["task"],
        task_sentences or sentences[2:3],
        "Objective: add the goal you were responsible for delivering.",
    )
    action = _section_lines(
        sections_from_answer["action"],
        sentences[3:6],
        "I led the workstream, coordinating delivery and stakeholders.",
    )
    result = _section_lines(
        sections_from_answer["result"],
        result_sentences or sentences[6:],
        "Outcome: summarise the impact on risk, delivery, or service quality.",
    )
    if flags.weak_result:
        result.append("Outcome: reduced [X] and improved [Y] in the target area.")

    metrics = _metrics_section(sections_from_answer["metrics"], answer_text, flags, signals, gaps)

    return {
        "situation": _compress(_strengthen(situation), flags.too_long),
        "task": _compress(_strengthen(task), flags.too_long),
        "action": _compress(_strengthen(_action_with_details(action, details)), flags.too_long),
        "result": _compress(_strengthen(result), flags.too_long),
        "metrics": _compress(metrics, flags.too_long),
    }


def format_sections(sections: dict[str, list[str]]) -> tuple[str, list[str]]:
    """Render sections as ``Title:`` blocks of ``- line`` bullets.

    Returns (text, unique lines that still carry [X]/[Y]/[Z] slots).
    """
    output: list[str] = []
    placeholder_lines: list[str] = []

    for key, title in SECTION_TITLES.items():
        output.append(f"{title}:")
        for line in sections[key] or ["Add detail here."]:
            cleaned = _strip_unsafe_placeholders(line)
            if not cleaned:
                continue
            output.append(f"- {cleaned}")
            if _FILL_SLOT_RE.search(cleaned):
                placeholder_lines.append(cleaned)
        output.append("")

    return "\n".join(output).strip(), _uniq(placeholder_lines)


def rewrite_star_answer(
    answer_text: str,
    question_text: str,
    flags: ScoreFlags,
    signals: list[str] | None = None,
    gaps: list[str] | None = None,
) -> StarRewrite:
    """Restructure an answer into STAR sections guided by its score flags."""
    raw_answer = (answer_text or "").strip()
    clean_answer = _strip_unsafe_placeholders(raw_answer)
    parsed, has_headings = parse_star_sections(clean_answer)
    sections = build_sections(parsed, clean_answer, flags, signals or [], gaps or [])

    changes: list[str] = []
    if not has_headings:
        changes.append("Structured the answer into STAR sections.")
    if flags.too_long:
        changes.append("Compressed long sections for clarity.")
    if flags.missing_metrics:
        changes.append("Added metric placeholders to quantify impact.")
    if flags.vague_action:
        changes.append("Strengthened ownership verbs in the Action section.")
    if flags.weak_result:
        changes.append("Inserted outcome framing in the Result section.")

    improved_text, placeholder_lines = format_sections(sections)
    logger.debug(
        "Rewrote STAR answer for %r: %d -> %d chars",
        (question_text or "")[:60], len(raw_answer), len(improved_text),
    )

    return StarRewrite(
        improved_text=improved_text,
        notes=RewriteNotes(
            changes=changes,
            inserted_placeholders=placeholder_lines,
            structure=RewriteStructure(
                has_s=bool(sections["situation"]),
                has_t=bool(sections["task"]),
                has_a=bool(sections["action"]),
                has_r=bool(sections["result"]),
                has_metrics=bool(sections["metrics"]),
            ),
            length=RewriteLength(before=len(raw_answer), after=len(improved_text)),
        ),
    )
