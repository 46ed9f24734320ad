"""Topic extraction: strip the question framing from a raw query."""

from __future__ import annotations

import re

#: Placeholder used when nothing is left after stripping.
DEFAULT_TOPIC = "this topic"

QUESTION_PREFIXES: tuple[str, ...] = (
    "what is", "what are", "how to", "how do", "explain", "describe",
    "tell me about", "summarize", "define", "who is", "who are",
)

_PREFIX_RE = re.compile(
    r"^\s*(?:" + "|".join(re.escape(p) for p in QUESTION_PREFIXES) + r")\b\s*",
    re.IGNORECASE,
)


def extract_topic(query: str) -> str:
    """Return the bare subject of *query*.

    Examples:
        >>> extract_topic("What is entropy?")
        'entropy'
        >>> extract_topic("quantum computing")
        'quantum computing'
        >>> extract_topic("?")
        'this topic'
    """
    topic = _PREFIX_RE.sub("", query, count=1).rstrip()
    if topic.endswith("?"):
        topic = topic[:-1]
    return topic.strip() or DEFAULT_TOPIC
