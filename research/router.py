"""Query classification and dispatch.

Responsibilities:
- Classify a raw query into a response strategy with an ordered rule list
- Run the research pipeline for research queries, render templates otherwise
- Expose ``process_query``, the single entry point for transports

Rules are evaluated in order and the first match wins, so a question like
"what is the news cycle" is answered as research: prefix rules run before
the substring rules.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Optional

from research.composer import history_template, how_to_template, news_template
from research.models import AgentResponse
from research.pipeline import ResearchPipeline
from research.topic import extract_topic

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

APOLOGY = (
    "I'm sorry, I encountered an error while processing your request. "
    "Please try rephrasing your question."
)


class Strategy(str, Enum):
    """How a query gets answered."""

    RESEARCH = "research"     # Wikipedia background + recent arXiv papers
    HOW_TO = "how_to"         # Static step-by-step template
    NEWS = "news"             # Static current-events template
    HISTORY = "history"       # Static historical-context template


_RESEARCH_PREFIXES: tuple[str, ...] = (
    "what is", "define", "explain", "describe", "summarize", "summary",
    "who is", "who are", "tell me about",
)
_HOW_TO_PREFIXES: tuple[str, ...] = ("how to", "how do")
_NEWS_SIGNALS: tuple[str, ...] = ("news", "current events")
_HISTORY_SIGNALS: tuple[str, ...] = ("history", "historical")


def _starts_with(prefixes: tuple[str, ...]) -> Callable[[str], bool]:
    return lambda q: q.startswith(prefixes)


def _contains(signals: tuple[str, ...]) -> Callable[[str], bool]:
    return lambda q: any(s in q for s in signals)


#: Ordered ``(predicate, strategy)`` rules over the lowercased query.
RULES: list[tuple[Callable[[str], bool], Strategy]] = [
    (_starts_with(_RESEARCH_PREFIXES), Strategy.RESEARCH),
    (_starts_with(_HOW_TO_PREFIXES), Strategy.HOW_TO),
    (_contains(_NEWS_SIGNALS), Strategy.NEWS),
    (_contains(_HISTORY_SIGNALS), Strategy.HISTORY),
]


def classify(query: str) -> Strategy:
    """Pick the response strategy for *query*.

    Examples:
        >>> classify("How to bake bread")
        <Strategy.HOW_TO: 'how_to'>
        >>> classify("What is the history of Rome?")
        <Strategy.RESEARCH: 'research'>
        >>> classify("photosynthesis")
        <Strategy.RESEARCH: 'research'>
    """
    lowered = query.lower()
    for predicate, strategy in RULES:
        if predicate(lowered):
            return strategy
    return Strategy.RESEARCH


_TEMPLATES: dict[Strategy, Callable[[str], str]] = {
    Strategy.HOW_TO: how_to_template,
    Strategy.NEWS: news_template,
    Strategy.HISTORY: history_template,
}


class Router:
    """Dispatches queries to a strategy and wraps the answer for the transport.

    Args:
        settings: Application configuration; read from the environment when omitted.
        pipeline: Research pipeline to use; built from *settings* when omitted.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        pipeline: Optional[ResearchPipeline] = None,
    ) -> None:
        if settings is None:
            from config.settings import Settings
            settings = Settings()
        self.settings = settings
        self.pipeline = pipeline or ResearchPipeline(settings)

    async def respond(self, query: str) -> str:
        """Return the answer text for *query*. May raise on unexpected failures."""
        strategy = classify(query)
        topic = extract_topic(query)
        logger.info("Query=%r strategy=%s topic=%r", query, strategy.value, topic)

        if strategy is Strategy.RESEARCH:
            return await self.pipeline.run(topic)
        return _TEMPLATES[strategy](topic)

    async def process_query(self, raw_text: str) -> AgentResponse:
        """Answer *raw_text*; never raises.

        Unexpected failures are logged and turned into an apology with
        ``agent="system"`` and ``confidence="low"``.
        """
        try:
            content = await self.respond(raw_text)
        except Exception:
            logger.exception("Error processing query=%r", raw_text)
            return AgentResponse(content=APOLOGY, agent="system", confidence="low")
        return AgentResponse(content=content, agent="research", confidence="high")


async def process_query(raw_text: str) -> AgentResponse:
    """Answer *raw_text* with a router built from environment settings.

    Never raises: a router that cannot be built (e.g. a malformed
    environment variable) yields the same apology as any other failure.
    """
    try:
        router = Router()
    except Exception:
        logger.exception("Could not build router from environment settings")
        return AgentResponse(content=APOLOGY, agent="system", confidence="low")
    return await router.process_query(raw_text)
