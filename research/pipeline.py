"""
One research run for a topic.

Flow
────
1. fetch_summary(topic)           → Wikipedia extract, or stop with "no information"
2. derive_keywords(summary)       → [topic, top summary terms]
3. search_papers(keywords)        → recent arXiv candidates (empty on failure)
4. rank_candidates(topic, papers) → scored, filtered, top 5
5. compose_research_response(...) → final text

Every run opens its own HTTP client, so concurrent runs share nothing.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Optional

import httpx

from research.composer import compose_research_response, no_information
from research.keywords import derive_keywords
from research.papers import search_papers
from research.reference import fetch_summary
from research.relevance import rank_candidates

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)


class ResearchPipeline:
    """Runs the summary → keywords → papers → answer pipeline.

    Args:
        settings: Endpoints, timeout and pipeline policy values.
        transport: Optional ``httpx`` transport, used by tests to stand in
            for both external sources.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.http_timeout,
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=True,
            transport=self.transport,
        )

    async def run(self, topic: str, now: Optional[datetime] = None) -> str:
        """Research *topic* and return the composed answer text."""
        settings = self.settings
        async with self._client() as client:
            reference = await fetch_summary(client, settings.summary_url, topic)
            if not reference.ok:
                logger.info("No reference summary for topic=%r (%s)", topic, reference.reason)
                return no_information(topic)
            summary = reference.value

            keywords = derive_keywords(summary, topic, max_terms=settings.max_keyword_terms)

            search = await search_papers(
                client,
                settings.paper_url,
                keywords,
                recency_years=settings.recency_years,
                max_results=settings.search_results,
                limit=settings.max_candidates,
                now=now,
            )

        if not search.ok:
            logger.info("Paper search unavailable for topic=%r (%s)", topic, search.reason)
        ranked = rank_candidates(topic, search.unwrap_or([]))
        return compose_research_response(topic, summary, ranked, settings.recency_years)
