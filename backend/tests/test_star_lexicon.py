from services.sanitize import sanitize_inline_text
from services.star_lexicon import (
    CONTEXT_CUES,
    OWNERSHIP_VERBS,
    count_matches,
    count_metrics,
    has_placeholders,
)


def test_count_matches_counts_each_phrase_once():
    assert count_matches("led led led the rollout", ("led", "owned")) == 1
    assert count_matches("i led and owned it", ("led", "owned")) == 2


def test_count_matches_catches_multi_word_phrases():
    assert count_matches("at the time we had no alerting", CONTEXT_CUES) == 1


def test_ownership_list_size():
    assert len(OWNERSHIP_VERBS) == 22


def test_count_metrics_mixed_units():
    text = "Cut costs by 12% and £300 over 6 weeks for 3k users"
    assert count_metrics(text) == 4


def test_count_metrics_percent_word():
    assert count_metrics("grew 12.5 percent") == 1
    assert count_metrics("uptime went to 99.9 %") == 1


def test_count_metrics_none():
    assert count_metrics("We made things a lot better") == 0


def test_count_metrics_ignores_non_ascii_digits():
    assert count_metrics("improved by ٣٠%") == 0


def test_has_placeholders():
    assert has_placeholders("we saved [X] hours")
    assert has_placeholders("budget was tbd")
    assert has_placeholders("for example, the queue")
    assert has_placeholders("this needs verification")
    assert not has_placeholders("see the examples and assumptions below")


def test_sanitize_strips_placeholder_tokens():
    assert sanitize_inline_text("Incident response [TBD]") == "Incident response"
    assert sanitize_inline_text("TODO add metrics for SLA") == "for SLA"


def test_sanitize_keeps_markdown_links():
    assert sanitize_inline_text("[docs](https://example.org)") == "[docs](https://example.org)"


def test_sanitize_empty():
    assert sanitize_inline_text("") == ""
    assert sanitize_inline_text("  [TBC]  ") == ""
