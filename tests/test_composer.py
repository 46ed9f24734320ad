"""Tests for research/composer.py — answer text and static templates."""

from __future__ import annotations

from datetime import date

import pytest

from research.composer import (
    compose_research_response,
    format_date,
    history_template,
    how_to_template,
    news_template,
    no_information,
)
from research.models import ScoredCandidate

SUMMARY = "Entropy measures disorder in thermodynamic systems."


@pytest.fixture
def papers() -> list[ScoredCandidate]:
    return [
        ScoredCandidate(
            title="Entropy in Quantum Systems",
            summary="We study entropy.",
            published=date(2024, 3, 14),
            relevance_score=1.0,
        ),
        ScoredCandidate(
            title="Disorder and information",
            summary="Information entropy.",
            published=date(2023, 11, 2),
            relevance_score=0.5,
        ),
    ]


class TestComposeWithPapers:
    def test_sections_in_order(self, papers):
        text = compose_research_response("entropy", SUMMARY, papers)
        order = [
            text.index("Research Analysis: entropy"),
            text.index("Background Overview"),
            text.index("Recent Research Findings"),
            text.index("Research Synthesis"),
            text.index("Key Insights"),
        ]
        assert order == sorted(order)

    def test_summary_verbatim(self, papers):
        assert SUMMARY in compose_research_response("entropy", SUMMARY, papers)

    def test_numbered_papers_with_date_and_relevance(self, papers):
        text = compose_research_response("entropy", SUMMARY, papers)
        assert "1. Entropy in Quantum Systems" in text
        assert "Published: 3/14/2024 | Relevance: 100%" in text
        assert "2. Disorder and information" in text
        assert "Relevance: 50%" in text

    def test_synthesis_mentions_count_and_topic(self, papers):
        text = compose_research_response("entropy", SUMMARY, papers)
        assert "Analysis of 2 highly relevant papers" in text
        assert "active ongoing research in entropy" in text

    def test_no_research_status_section(self, papers):
        assert "Research Status" not in compose_research_response("entropy", SUMMARY, papers)


class TestComposeWithoutPapers:
    def test_no_papers_branch(self):
        text = compose_research_response("entropy", SUMMARY, [])
        assert text.startswith("Research Analysis: entropy")
        assert SUMMARY in text
        assert "Research Status" in text
        assert "no recent academic papers were found" in text
        assert "mature field" in text
        assert "other venues" in text
        assert "Research Synthesis" not in text

    def test_window_in_text_follows_setting(self):
        assert "last 3 years" in compose_research_response("entropy", SUMMARY, [], recency_years=3)


class TestHelpers:
    def test_format_date(self):
        assert format_date(date(2024, 1, 5)) == "1/5/2024"

    def test_no_information(self):
        assert no_information("xyzzy") == 'No information found for "xyzzy".'


class TestTemplates:
    def test_how_to_substitutes_topic(self):
        text = how_to_template("bake bread")
        assert text.startswith("How to bake bread:")
        assert "step-by-step guide for bake bread" in text

    def test_history_substitutes_topic(self):
        text = history_template("Rome")
        assert text.startswith("Historical Context of Rome:")
        assert "aspect of Rome's history" in text

    def test_news_mentions_topic(self):
        assert "climate" in news_template("climate")
