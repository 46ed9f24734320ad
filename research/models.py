"""
Pydantic models and result types shared across the research core.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Candidate(BaseModel):
    """A paper parsed from the search feed, before relevance scoring."""

    title: str = Field(min_length=5)
    summary: str = ""
    published: date


class ScoredCandidate(Candidate):
    """A candidate paper together with its topic relevance."""

    relevance_score: float = Field(ge=0.0, le=1.0)


class AgentResponse(BaseModel):
    """What the dispatcher hands back to the transport layer."""

    content: str
    agent: Literal["research", "system"] = "research"
    confidence: Literal["high", "low"] = "high"


class ChatMessage(BaseModel):
    """A single message stored in a conversation."""

    id: int
    type: Literal["user", "bot"]
    content: str
    agent: Optional[str] = None
    timestamp: datetime


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Outcome of a call to an external source.

    Either ``ok`` with a value, or unavailable with a short reason. Keeps
    "the source had nothing" apart from "the source had an empty answer".
    """

    value: Optional[T] = None
    ok: bool = True
    reason: str = ""

    @classmethod
    def success(cls, value: T) -> Lookup[T]:
        return cls(value=value, ok=True)

    @classmethod
    def unavailable(cls, reason: str) -> Lookup[T]:
        return cls(value=None, ok=False, reason=reason)

    def unwrap_or(self, default: T) -> T:
        """Return the value when ok, otherwise *default*."""
        return self.value if self.ok else default
