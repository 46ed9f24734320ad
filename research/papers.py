"""Candidate paper search against the arXiv Atom API.

Responsibilities:
- Build a fielded boolean query from the keyword list
- Request the most recently submitted matches
- Parse the Atom feed into ``Candidate`` records inside the recency window

A failed or malformed response never raises: it comes back as
``Lookup.unavailable`` and the caller carries on with no papers.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Optional

import httpx

from research.models import Candidate, Lookup
from research.text import collapse_whitespace, truncate

logger = logging.getLogger(__name__)

_ATOM = "{http://www.w3.org/2005/Atom}"

#: Keywords considered when building ``all:`` clauses.
QUERY_KEYWORDS = 3
#: Keywords of this length or shorter are too vague to search on their own.
MIN_KEYWORD_LENGTH = 5
MIN_TITLE_LENGTH = 5
SUMMARY_LIMIT = 300

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ── Query building ─────────────────────────────────────────────────────────────


def _phrase(keyword: str) -> str:
    return f'"{keyword}"' if any(ch.isspace() for ch in keyword) else keyword


def build_search_query(keywords: list[str]) -> str:
    """Build the arXiv ``search_query`` expression for *keywords*.

    Examples:
        >>> build_search_query(["quantum computing", "qubits", "gate"])
        'ti:"quantum computing" OR abs:"quantum computing" OR all:"quantum computing" OR all:qubits'
    """
    if not keywords:
        return ""

    clauses: list[str] = []
    primary = keywords[0]
    if any(ch.isspace() for ch in primary):
        clauses.append(f'ti:"{primary}"')
        clauses.append(f'abs:"{primary}"')

    for keyword in keywords[:QUERY_KEYWORDS]:
        if len(keyword) >= MIN_KEYWORD_LENGTH:
            clauses.append(f"all:{_phrase(keyword)}")

    return " OR ".join(clauses)


# ── Recency window ─────────────────────────────────────────────────────────────


def recency_cutoff(now: datetime, years: int) -> datetime:
    """Return the same calendar moment *years* earlier (Feb 29 becomes Feb 28).

    A naive *now* is taken to be UTC, matching ``parse_published``.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    try:
        return now.replace(year=now.year - years)
    except ValueError:
        return now.replace(year=now.year - years, day=28)


def parse_published(raw: Optional[str]) -> datetime:
    """Parse an Atom ``published`` timestamp; missing or invalid values map to the epoch."""
    if not raw or not raw.strip():
        return EPOCH
    try:
        parsed = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable published date %r", raw)
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ── Feed parsing ───────────────────────────────────────────────────────────────


def _text(entry: ET.Element, tag: str) -> str:
    node = entry.find(f"{_ATOM}{tag}")
    if node is None:
        return ""
    return collapse_whitespace("".join(node.itertext()))


def parse_feed(xml_text: str, cutoff: datetime, limit: int = 5) -> list[Candidate]:
    """Turn an arXiv Atom document into at most *limit* candidates.

    Entries with a missing or too-short title are skipped, as are entries
    published before *cutoff*.

    Raises:
        xml.etree.ElementTree.ParseError: If *xml_text* is not well-formed.
    """
    root = ET.fromstring(xml_text)
    candidates: list[Candidate] = []

    for entry in root.iter(f"{_ATOM}entry"):
        if len(candidates) >= limit:
            break

        title = _text(entry, "title")
        if len(title) < MIN_TITLE_LENGTH:
            logger.debug("Skipping paper with invalid title %r", title)
            continue

        published = parse_published(_text(entry, "published"))
        if published < cutoff:
            logger.debug("Skipping %r published %s (before %s)", title[:50], published.date(), cutoff.date())
            continue

        candidates.append(Candidate(
            title=title,
            summary=truncate(_text(entry, "summary"), SUMMARY_LIMIT),
            published=published.date(),
        ))

    return candidates


# ── Search ─────────────────────────────────────────────────────────────────────


async def search_papers(
    client: httpx.AsyncClient,
    base_url: str,
    keywords: list[str],
    *,
    recency_years: int = 6,
    max_results: int = 20,
    limit: int = 5,
    now: Optional[datetime] = None,
) -> Lookup[list[Candidate]]:
    """Search arXiv for recent papers matching *keywords*.

    Args:
        client: HTTP client owned by the calling pipeline run.
        base_url: The arXiv ``api/query`` endpoint.
        keywords: Ordered keyword list, topic first.
        recency_years: Drop papers published longer ago than this.
        max_results: Number of feed entries to request.
        limit: Maximum number of candidates to return.
        now: Reference time for the recency window (defaults to now, UTC).

    Returns:
        ``Lookup.success(candidates)`` (possibly empty), or
        ``Lookup.unavailable`` on transport, status or XML errors.
    """
    query = build_search_query(keywords)
    if not query:
        return Lookup.success([])

    cutoff = recency_cutoff(now or datetime.now(timezone.utc), recency_years)
    logger.info("Paper search query=%r published_after=%s", query, cutoff.date())

    params = {
        "search_query": query,
        "start": 0,
        "max_results": max_results,
        "sortBy": "submittedDate",
        "sortOrder": "descending",
    }
    try:
        resp = await client.get(base_url, params=params)
    except httpx.HTTPError as exc:
        logger.warning("Paper search failed: %s", exc)
        return Lookup.unavailable(f"transport error: {exc.__class__.__name__}")

    if not resp.is_success:
        logger.warning("Paper search returned %d", resp.status_code)
        return Lookup.unavailable(f"status {resp.status_code}")

    try:
        candidates = parse_feed(resp.text, cutoff, limit=limit)
    except ET.ParseError as exc:
        logger.warning("Paper feed XML parse error: %s", exc)
        return Lookup.unavailable("malformed feed")

    logger.info("Found %d papers published in the last %d years", len(candidates), recency_years)
    return Lookup.success(candidates)
