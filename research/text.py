"""Free-text normalisation helpers used by keyword extraction and scoring."""

from __future__ import annotations

import re

#: Common English function and auxiliary words ignored when ranking terms.
STOP_WORDS: frozenset[str] = frozenset([
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "is", "are", "was", "were", "be", "been", "have", "has",
    "had", "do", "does", "did", "will", "would", "could", "should", "may",
    "might", "must", "can", "cannot", "a", "an", "this", "that", "these",
    "those", "from", "into", "through", "during", "before", "after", "above",
    "below", "between", "among", "also", "such", "other", "used", "using",
    "use",
])

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

ELLIPSIS = "..."


def tokenize(text: str) -> list[str]:
    """Lowercase *text*, turn punctuation into spaces and split on whitespace.

    Examples:
        >>> tokenize("Entropy, in physics: a measure.")
        ['entropy', 'in', 'physics', 'a', 'measure']
    """
    return _NON_WORD.sub(" ", text.lower()).split()


def content_terms(text: str, min_length: int = 5) -> list[str]:
    """Return the tokens of *text* that are at least *min_length* long and not stop words.

    Order and repetitions are preserved so callers can count frequencies.
    """
    return [
        token for token in tokenize(text)
        if len(token) >= min_length and token not in STOP_WORDS
    ]


def collapse_whitespace(text: str) -> str:
    """Collapse newlines and runs of whitespace to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: str, limit: int) -> str:
    """Cut *text* to *limit* characters, appending ``...`` when anything was dropped."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS
