"""Inline text cleanup for user-supplied labels and answer lines."""

import re

# "[...]" spans, but not markdown links like "[docs](https://...)"
_PLACEHOLDER_TOKEN_RE = re.compile(r"\[[^\]]+\](?!\()")
_FILLER_WORD_RE = re.compile(r"\b(?:todo|tbd|tbc)\b", re.IGNORECASE)
_ADD_METRIC_RE = re.compile(r"\badd metrics?\b", re.IGNORECASE)
_MULTI_SPACE_RE = re.compile(r"\s{2,}")


def sanitize_inline_text(value: str) -> str:
    """Strip placeholder tokens and filler markers from a single line of text."""
    cleaned = _PLACEHOLDER_TOKEN_RE.sub("", value or "")
    cleaned = _FILLER_WORD_RE.sub("", cleaned)
    cleaned = _ADD_METRIC_RE.sub("", cleaned)
    return _MULTI_SPACE_RE.sub(" ", cleaned).strip()
