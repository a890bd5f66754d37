import re

import pytest

from models.schemas.star_score import ScoreFlags
from services.star_scorer import (
    DEFAULT_RECOMMENDATION,
    EMPTY_ANSWER_RECOMMENDATION,
    _to_base36,
    build_question_key,
    build_recommendations,
    compute_relevance_score,
    extract_keywords,
    hash_string,
    length_bonus,
    normalize_text,
    round_half_up,
    score_star_answer,
    tokenize,
)

INCIDENT_ANSWER = (
    "I led a team of 5 engineers. Situation: the service had 20% downtime. "
    "Task: I was responsible for reducing incidents. "
    "I implemented monitoring and reduced MTTR by 40% over 3 months."
)  # 181 chars
INCIDENT_QUESTION = "Tell me about a time you led an incident response"
NEUTRAL_PADDING = " The dashboards were reviewed every morning by the on-call engineers."  # 69 chars


def _repeat(text: str, times: int) -> str:
    return " ".join([text] * times)


# --- Normalizer ---

def test_normalize_text():
    assert normalize_text("Led the SRE-team, cut MTTR!") == "led the sre team cut mttr"
    assert normalize_text("   ") == ""


def test_tokenize_drops_short_tokens_and_stopwords():
    assert tokenize("led the sre team cut mttr on it") == {"led", "sre", "cut", "mttr"}


def test_extract_keywords_unique_in_order():
    keywords = extract_keywords(["Incident response", "incident  RESPONSE", "[TBD] Leadership"])
    assert keywords == ["incident", "response", "leadership"]


@pytest.mark.parametrize(
    "length,expected",
    [(600, 0), (601, 4), (1200, 4), (1201, 6)],
)
def test_length_bonus(length, expected):
    assert length_bonus(length, 600) == expected


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(0.5) == 1


# --- Relevance ---

def test_relevance_neutral_without_keywords():
    assert compute_relevance_score("anything at all", "", [], []) == 10
    assert compute_relevance_score("anything at all", "Tell me about the time", [], []) == 10


def test_relevance_rounds_half_up():
    question = "alpha bravo charlie delta echo foxtrot golf hotel"
    # 1 of 8 keywords -> 2.5 -> 3
    assert compute_relevance_score("alpha only", question, [], []) == 3


def test_relevance_denominator_capped_at_eight():
    question = "alpha bravo charlie delta echo foxtrot golf hotel india juliet"
    answer = "alpha bravo charlie delta echo foxtrot golf hotel"
    assert compute_relevance_score(answer, question, [], []) == 20
    assert compute_relevance_score(question, question, [], []) == 20


def test_relevance_uses_signals_and_gaps():
    score = compute_relevance_score(
        "Our kubernetes migration", "Describe a project", ["Kubernetes"], ["Migration"]
    )
    # keywords: project, kubernetes, migration -> 2/3
    assert score == 13


# --- Empty answer ---

@pytest.mark.parametrize("answer", ["", "   \n\t", None])
def test_empty_answer_short_circuit(answer):
    result = score_star_answer(answer, "x")
    assert result.total_score == 0
    assert all(v == 0 for v in result.breakdown.model_dump().values())
    flags = result.flags
    assert flags.missing_metrics and flags.weak_result and flags.vague_action
    assert flags.too_short and flags.low_relevance
    assert not flags.too_long
    assert not flags.has_placeholders
    assert result.recommendations == [EMPTY_ANSWER_RECOMMENDATION]


# --- Category scores and aggregate ---

def test_incident_answer_scores_well():
    answer = _repeat(INCIDENT_ANSWER, 3)
    result = score_star_answer(answer, INCIDENT_QUESTION, ["incident response", "leadership"])

    assert len(answer) > 450
    assert result.breakdown.situation == 10
    assert result.breakdown.task == 14
    assert result.breakdown.action == 18
    assert result.breakdown.result == 20
    assert result.breakdown.metrics == 20
    assert result.breakdown.relevance == 5
    assert result.total_score == 87
    assert result.flags.missing_metrics is False
    assert result.flags.vague_action is False
    assert result.flags.too_short is False
    assert result.flags.low_relevance is True


def test_vague_short_answer():
    result = score_star_answer("I helped out.", "Tell me about a time you led a project")
    assert result.flags.too_short
    assert result.flags.vague_action
    assert result.flags.missing_metrics
    assert result.breakdown.metrics == 0
    assert result.total_score == 9
    assert any("450+ characters" in rec for rec in result.recommendations)
    assert any("measurable metric" in rec for rec in result.recommendations)


def test_placeholder_costs_exactly_thirty_points():
    answer = _repeat(INCIDENT_ANSWER, 3)
    clean = score_star_answer(answer, INCIDENT_QUESTION, ["incident response"])
    with_placeholder = score_star_answer(answer + " [TBD]", INCIDENT_QUESTION, ["incident response"])

    assert clean.flags.has_placeholders is False
    assert with_placeholder.flags.has_placeholders is True
    assert clean.total_score - with_placeholder.total_score == 30
    assert with_placeholder.recommendations[0].startswith("Replace placeholders")


def test_too_short_costs_fifteen_points():
    padded_answer = INCIDENT_ANSWER + NEUTRAL_PADDING * 4
    short = score_star_answer(INCIDENT_ANSWER, INCIDENT_QUESTION)
    padded = score_star_answer(padded_answer, INCIDENT_QUESTION)

    assert len(INCIDENT_ANSWER) < 450 < len(padded_answer) < 600
    assert short.flags.too_short is True
    assert padded.flags.too_short is False
    assert short.breakdown == padded.breakdown
    assert padded.total_score - short.total_score == 15
    assert short.total_score == 74


def test_too_long_answer_penalised_and_length_bonus_applied():
    answer = _repeat(INCIDENT_ANSWER, 13)
    result = score_star_answer(answer, INCIDENT_QUESTION)

    assert len(answer) > 2200
    assert result.flags.too_long is True
    assert result.flags.too_short is False
    assert result.breakdown.situation == 16
    assert result.breakdown.task == 20
    assert result.total_score == 91
    assert any(rec.startswith("Trim to the most relevant") for rec in result.recommendations)


def test_total_capped_at_100_even_when_categories_exceed_it():
    answer = _repeat(INCIDENT_ANSWER, 7)
    result = score_star_answer(answer, "Describe when you led and reduced incidents")

    assert sum(result.breakdown.model_dump().values()) == 112
    assert result.total_score == 100


def test_scores_stay_in_range_for_varied_input():
    answers = [
        "x",
        "Я руководил командой и сократил простои на 30% 😀 数据",
        "[" * 500,
        _repeat("tbd lorem placeholder example", 200),
        _repeat(INCIDENT_ANSWER, 30),
    ]
    for answer in answers:
        result = score_star_answer(answer, "Tell me about a time", ["Ops"], ["Budget"])
        assert 0 <= result.total_score <= 100
        for value in result.breakdown.model_dump().values():
            assert 0 <= value <= 20
        assert result.recommendations


def test_scoring_is_deterministic():
    kwargs = dict(
        answer_text=_repeat(INCIDENT_ANSWER, 2),
        question_text=INCIDENT_QUESTION,
        signals=["leadership"],
        gaps=["metrics"],
    )
    assert score_star_answer(**kwargs) == score_star_answer(**kwargs)


# --- Recommendations ---

@pytest.mark.parametrize(
    "flag,phrase",
    [
        ("has_placeholders", "Replace placeholders"),
        ("too_short", "450+ characters"),
        ("too_long", "Trim to the most relevant"),
        ("vague_action", "ownership verbs"),
        ("weak_result", "outcome and business impact"),
        ("missing_metrics", "measurable metric"),
        ("low_relevance", "role signals"),
    ],
)
def test_each_flag_maps_to_one_recommendation(flag, phrase):
    recommendations = build_recommendations(ScoreFlags(**{flag: True}))
    assert len(recommendations) == 1
    assert phrase in recommendations[0]


def test_recommendation_order_is_fixed():
    flags = ScoreFlags(**{name: True for name in ScoreFlags.model_fields})
    recommendations = build_recommendations(flags)
    assert len(recommendations) == 7
    assert recommendations[0].startswith("Replace placeholders")
    assert "450+" in recommendations[1]
    assert recommendations[2].startswith("Trim")
    assert "ownership verbs" in recommendations[3]
    assert "business impact" in recommendations[4]
    assert "measurable metric" in recommendations[5]
    assert "role signals" in recommendations[6]


def test_low_relevance_names_first_two_clean_labels():
    recommendations = build_recommendations(
        ScoreFlags(low_relevance=True),
        signals=["Incident response [TBD]", ""],
        gaps=["Stakeholder management", "Budget"],
    )
    assert recommendations == [
        "Reference role signals such as Incident response and Stakeholder management."
    ]


def test_no_flags_gives_generic_tip():
    assert build_recommendations(ScoreFlags()) == [DEFAULT_RECOMMENDATION]


# --- Question keys ---

def test_hash_string_known_values():
    assert hash_string("") == 5381
    assert hash_string("a") == 177604


def test_hash_string_walks_lone_surrogates():
    assert hash_string("\ud800") == 159141
    assert build_question_key("Tell me \ud800 about it", 0).startswith("tell-me-about-it-0-")


def test_to_base36():
    assert _to_base36(0) == "0"
    assert _to_base36(35) == "z"
    assert _to_base36(36) == "10"


def test_build_question_key_format():
    key = build_question_key("Tell me about a time you led a project", 0)
    assert key.startswith("tell-me-about-a-time-you-led-a-project-0-")
    assert re.fullmatch(r"[a-z0-9-]+-0-[0-9a-z]{1,6}", key)


def test_build_question_key_is_stable_and_index_specific():
    question = "Describe a conflict with a stakeholder."
    assert build_question_key(question, 1) == build_question_key(question, 1)
    assert build_question_key(question, 1) != build_question_key(question, 2)


def test_build_question_key_fallback_slug_and_truncation():
    assert build_question_key("???", 2).startswith("question-2-")
    long_key = build_question_key("word " * 30, 3)
    slug = long_key.rsplit("-3-", 1)[0]
    assert len(slug) <= 40
