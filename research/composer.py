"""Answer composition.

Renders the research result (topic, reference summary, ranked papers) into
the final text block, and holds the static templates used by the how-to,
news and history strategies.
"""

from __future__ import annotations

import logging
from datetime import date

from research.models import ScoredCandidate

logger = logging.getLogger(__name__)


def format_date(value: date) -> str:
    """Short month/day/year form, e.g. ``3/14/2024``."""
    return f"{value.month}/{value.day}/{value.year}"


def no_information(topic: str) -> str:
    """Response used when the reference lookup comes back empty."""
    return f'No information found for "{topic}".'


def compose_research_response(
    topic: str,
    reference_summary: str,
    papers: list[ScoredCandidate],
    recency_years: int = 6,
) -> str:
    """Render the full research answer.

    Sections, in order: header, background overview, then either the paper
    list with synthesis and key insights, or the research-status note when
    no paper qualified.
    """
    parts = [
        f"Research Analysis: {topic}\n\n",
        f"📖 Background Overview:\n{reference_summary}\n\n",
    ]

    if papers:
        parts.append(f"🔬 Recent Research Findings (Last {recency_years} Years):\n\n")
        for index, paper in enumerate(papers, start=1):
            parts.append(
                f"{index}. {paper.title}\n"
                f"   Published: {format_date(paper.published)} | "
                f"Relevance: {paper.relevance_score * 100:.0f}%\n"
                f"   {paper.summary}\n\n"
            )
        parts.append(
            "📊 Research Synthesis:\n"
            f"Analysis of {len(papers)} highly relevant papers from the last {recency_years} years "
            f"shows active ongoing research in {topic}. These studies contribute to advancing our "
            "understanding through various methodological approaches and findings, indicating "
            "this remains an important and evolving field of study.\n\n"
        )
        parts.append(
            "💡 Key Insights:\n"
            "The combination of established knowledge from Wikipedia and cutting-edge research "
            f"from arXiv provides a comprehensive view of {topic}, covering both foundational "
            "concepts and the latest academic developments. This dual approach ensures both "
            "accessibility for general understanding and depth for advanced research purposes."
        )
    else:
        parts.append(
            "🔍 Research Status:\n"
            f"While {topic} has a solid foundation of established knowledge, no recent academic "
            f"papers were found in the arXiv database for the last {recency_years} years that "
            "directly match this topic. This could indicate either a mature field with "
            "established knowledge or research published in other venues not covered by arXiv."
        )

    response = "".join(parts)
    logger.info("Final response for topic=%r: %d papers, %d characters", topic, len(papers), len(response))
    return response


# ── Static templates ───────────────────────────────────────────────────────────


def how_to_template(topic: str) -> str:
    return f"""How to {topic}:

Here's a step-by-step guide for {topic}:

Step 1: Preparation
- Gather necessary materials and tools
- Understand the prerequisites
- Set up your workspace

Step 2: Planning
- Break down the task into smaller steps
- Create a timeline or checklist
- Identify potential challenges

Step 3: Execution
- Follow the steps systematically
- Take notes and document your progress
- Make adjustments as needed

Step 4: Review
- Check your work for accuracy
- Test the results
- Make improvements if necessary

Additional Tips:
- Start with simpler examples before tackling complex cases
- Don't hesitate to ask for help when needed
- Practice regularly to improve your skills

Would you like me to elaborate on any specific step or provide more detailed guidance for your particular situation?"""


def news_template(topic: str) -> str:
    return f"""Current Events and News: {topic}

I understand you're looking for current news and events. Here's what I can tell you:

Recent Developments:
- Technology continues to advance rapidly
- Global events are shaping various industries
- New research and discoveries are being made regularly

Important Note:
For the most up-to-date and accurate news information, I recommend:
- Checking reputable news websites
- Following official sources and organizations
- Using news aggregators and apps
- Verifying information from multiple sources

Topics I Can Help With:
- General knowledge and background information
- Historical context and analysis
- Explanation of complex topics
- Research and fact-checking assistance

Would you like me to help you understand any specific topic or provide background information on current events?"""


def history_template(topic: str) -> str:
    return f"""Historical Context of {topic}:

Let me provide you with the historical background of {topic}:

Early Origins:
- Initial development and early concepts
- Key figures and contributors
- Historical milestones and breakthroughs

Evolution Over Time:
- Major developments and changes
- Periods of significant growth or decline
- Influence of historical events and context

Modern Era:
- Current state and recent developments
- Contemporary applications and uses
- Future prospects and trends

Historical Significance:
Understanding the history of {topic} is important because it:
- Provides context for current developments
- Helps explain why things are the way they are
- Offers insights into future possibilities
- Connects past achievements to present challenges

Key Historical Figures:
- Important contributors and their contributions
- Influential thinkers and practitioners
- Pioneers and innovators

Would you like me to focus on a specific time period or aspect of {topic}'s history?"""
