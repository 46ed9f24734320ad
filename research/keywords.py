"""Keyword derivation from a reference summary.

The topic itself always leads the list; it is followed by the most frequent
content terms of the summary, which widen the paper search beyond the literal
topic string.
"""

from __future__ import annotations

import logging
from collections import Counter

from research.text import content_terms

logger = logging.getLogger(__name__)

#: Hard upper bound on the keyword list, topic included.
MAX_KEYWORDS = 5


def top_terms(summary: str, limit: int, exclude: frozenset[str] = frozenset()) -> list[str]:
    """Return up to *limit* distinct summary terms, most frequent first.

    Frequencies are counted over every occurrence; ties keep the order in
    which the terms first appear in *summary*.

    Examples:
        >>> top_terms("Heat flows. Heat moves. Energy flows.", 2)
        ['flows', 'moves']
    """
    counts = Counter(t for t in content_terms(summary) if t not in exclude)
    # Counter preserves insertion order, and sorted() is stable.
    ranked = sorted(counts, key=lambda term: counts[term], reverse=True)
    return ranked[:limit]


def derive_keywords(summary: str, topic: str, max_terms: int = 3) -> list[str]:
    """Build the ordered keyword list for the paper search.

    Args:
        summary: Reference summary text for the topic.
        topic: The extracted topic; always returned as the first element.
        max_terms: How many summary terms to append after the topic.

    Returns:
        ``[topic, *terms]`` with no case-insensitive duplicates, at most
        ``MAX_KEYWORDS`` long.
    """
    terms = top_terms(summary, max_terms, exclude=frozenset([topic.lower()]))
    keywords = [topic, *terms][:MAX_KEYWORDS]
    logger.info("Keywords for topic=%r: %s", topic, keywords)
    return keywords
