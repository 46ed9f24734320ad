"""Relevance scoring and filtering of candidate papers against a topic."""

from __future__ import annotations

import logging

from research.models import Candidate, ScoredCandidate

logger = logging.getLogger(__name__)

#: Topic words this short ("of", "the", "ai") are ignored when scoring.
MIN_TOPIC_WORD_LENGTH = 4
EXACT_PHRASE_SCORE = 0.5
WORD_MATCH_THRESHOLD = 0.05
# Unreachable in practice: any score above this already satisfies one of the
# other two acceptance clauses. Kept so the rule set stays complete.
STANDALONE_THRESHOLD = 0.3
MAX_RANKED = 5


def topic_words(topic: str) -> list[str]:
    """Return the lowercase whitespace tokens of *topic* longer than three characters."""
    return [w for w in topic.lower().split() if len(w) >= MIN_TOPIC_WORD_LENGTH]


def relevance_score(topic: str, text: str) -> float:
    """Score how well *text* covers *topic*, in ``[0, 1]``.

    The score is the fraction of topic words found in the text, raised to
    ``0.5`` when the whole topic phrase appears.

    Examples:
        >>> relevance_score("quantum error correction", "new quantum codes for error rates")
        0.6666666666666666
        >>> relevance_score("entropy", "entropy in quantum systems")
        1.0
    """
    text = text.lower()
    phrase = EXACT_PHRASE_SCORE if topic.lower() in text else 0.0
    words = topic_words(topic)
    if not words:
        return phrase
    matched = sum(1 for w in words if w in text)
    return max(matched / len(words), phrase)


def _combined_text(candidate: Candidate) -> str:
    return f"{candidate.title} {candidate.summary}".lower()


def is_relevant(topic: str, candidate: Candidate) -> tuple[bool, float]:
    """Apply the acceptance rule to one candidate; return ``(accepted, score)``."""
    text = _combined_text(candidate)
    score = relevance_score(topic, text)
    exact = topic.lower() in text
    any_word = any(w in text for w in topic_words(topic))

    accepted = (
        exact
        or (any_word and score > WORD_MATCH_THRESHOLD)
        or score > STANDALONE_THRESHOLD
    )
    logger.debug(
        "Relevance %r: words=%s score=%.2f exact=%s accepted=%s",
        candidate.title[:50], any_word, score, exact, accepted,
    )
    return accepted, score


def rank_candidates(topic: str, candidates: list[Candidate]) -> list[ScoredCandidate]:
    """Keep relevant candidates, best first, at most ``MAX_RANKED``.

    Candidates with equal scores keep their search order.
    """
    if not candidates:
        logger.info("No papers to rank for topic=%r", topic)
        return []

    kept: list[ScoredCandidate] = []
    for candidate in candidates:
        accepted, score = is_relevant(topic, candidate)
        if accepted:
            kept.append(ScoredCandidate(**candidate.model_dump(), relevance_score=score))

    kept.sort(key=lambda c: c.relevance_score, reverse=True)
    logger.info("Selected %d of %d papers for topic=%r", len(kept[:MAX_RANKED]), len(candidates), topic)
    return kept[:MAX_RANKED]
