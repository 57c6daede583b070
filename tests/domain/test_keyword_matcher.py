"""Tests for job-description keyword matching."""

import json

import pytest

from resume_copilot.domain.keyword_matcher import (
    KeywordSets,
    build_add_keywords_message,
    extract_keyword_sets,
    format_keyword_report,
    match_keywords,
)

ANSWER = {
    "keywords": ["Python", "API design"],
    "skills": ["SQL", "python"],
    "tools": ["Docker", "Python"],
    "softSkills": ["Leadership"],
}


class TestExtractKeywordSets:
    def test_parses_json_wrapped_in_prose(self):
        raw = "Sure! Here is the JSON:\n```json\n" + json.dumps(ANSWER) + "\n```\nHope it helps."
        sets = extract_keyword_sets(raw)
        assert sets is not None
        assert sets.soft_skills == ["Leadership"]
        assert sets.tools == ["Docker", "Python"]

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "I couldn't find any keywords.",
            "{not json}",
            json.dumps({"keywords": ["a"], "skills": [], "tools": []}),
            json.dumps({**ANSWER, "skills": "SQL"}),
        ],
    )
    def test_unusable_answers_yield_none(self, raw):
        assert extract_keyword_sets(raw) is None


class TestMatchKeywords:
    def test_case_insensitive_substring_match(self):
        sets = KeywordSets.model_validate(ANSWER)
        analysis = match_keywords(sets, "Built REST services in PYTHON and sql. Led a team (leadership).")
        assert analysis.matched == ["Python", "SQL", "python", "Leadership"]
        assert analysis.missing == ["API design", "Docker"]
        assert analysis.match_percent == 67

    def test_union_dedupes_exact_duplicates_in_order(self):
        sets = KeywordSets.model_validate(ANSWER)
        assert sets.all_keywords() == ["Python", "API design", "SQL", "python", "Docker", "Leadership"]

    def test_matched_and_missing_partition_the_union(self):
        sets = KeywordSets.model_validate(ANSWER)
        analysis = match_keywords(sets, "docker")
        assert sorted(analysis.matched + analysis.missing) == sorted(sets.all_keywords())
        assert not set(analysis.matched) & set(analysis.missing)

    def test_empty_sets_match_zero_percent(self):
        sets = KeywordSets(keywords=[], skills=[], tools=[], soft_skills=[])
        analysis = match_keywords(sets, "anything")
        assert analysis.matched == []
        assert analysis.missing == []
        assert analysis.match_percent == 0

    @pytest.mark.parametrize(
        ("found", "total", "expected"),
        [(1, 8, 13), (1, 2, 50), (1, 3, 33), (2, 3, 67), (3, 3, 100), (0, 4, 0)],
    )
    def test_match_percent_rounds_half_up(self, found, total, expected):
        keywords = [f"kw{i}" for i in range(total)]
        sets = KeywordSets(keywords=keywords, skills=[], tools=[], soft_skills=[])
        text = " ".join(keywords[:found])
        assert match_keywords(sets, text).match_percent == expected

    def test_to_dict_uses_wire_names(self):
        sets = KeywordSets.model_validate(ANSWER)
        data = match_keywords(sets, "").to_dict()
        assert set(data) == {"keywords", "skills", "tools", "softSkills", "matched", "missing", "matchPercent"}
        assert data["matchPercent"] == 0


def test_add_keywords_message_lists_missing_terms():
    message = build_add_keywords_message(["Docker", "API design"])
    assert "Docker, API design" in message
    assert message.startswith("Help me naturally add these missing keywords")


def test_format_keyword_report():
    analysis = match_keywords(KeywordSets.model_validate(ANSWER), "python")
    report = format_keyword_report(analysis)
    assert report.startswith("## Keyword Match: 33%")
    assert "### Found in your resume (2)" in report
    assert "### Missing (4)" in report
