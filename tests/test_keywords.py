"""Tests for research/keywords.py — keyword derivation."""

from __future__ import annotations

from research.keywords import MAX_KEYWORDS, derive_keywords, top_terms

SUMMARY = (
    "Photosynthesis is a process used by plants and other organisms to convert "
    "light energy into chemical energy. The chemical energy is stored in "
    "carbohydrate molecules. Plants release oxygen as a byproduct."
)


class TestTopTerms:
    def test_ranked_by_frequency(self):
        # energy ×3, chemical ×2, plants ×2; plants appears first
        assert top_terms(SUMMARY, 3) == ["energy", "plants", "chemical"]

    def test_ties_keep_first_appearance(self):
        assert top_terms("alpha1 gamma2 delta3", 2) == ["alpha1", "gamma2"]

    def test_counts_before_deduplication(self):
        assert top_terms("first second second third third third", 1) == ["third"]

    def test_exclusion(self):
        assert "energy" not in top_terms(SUMMARY, 3, exclude=frozenset(["energy"]))

    def test_empty_summary(self):
        assert top_terms("", 3) == []


class TestDeriveKeywords:
    def test_topic_comes_first(self):
        keywords = derive_keywords(SUMMARY, "photosynthesis")
        assert keywords[0] == "photosynthesis"

    def test_topic_is_returned_exactly(self):
        keywords = derive_keywords(SUMMARY, "Photosynthesis In Plants")
        assert keywords[0] == "Photosynthesis In Plants"

    def test_never_more_than_five(self):
        long_summary = " ".join(f"token{i:03d}" for i in range(100))
        assert len(derive_keywords(long_summary, "topic", max_terms=10)) == MAX_KEYWORDS

    def test_no_case_insensitive_duplicates(self):
        keywords = derive_keywords("Entropy measures disorder. Entropy grows.", "Entropy")
        lowered = [k.lower() for k in keywords]
        assert len(lowered) == len(set(lowered))
        assert keywords == ["Entropy", "measures", "disorder", "grows"]

    def test_terms_are_long_non_stop_words(self):
        for term in derive_keywords(SUMMARY, "photosynthesis")[1:]:
            assert len(term) > 4

    def test_empty_summary_yields_topic_only(self):
        assert derive_keywords("", "entropy") == ["entropy"]
