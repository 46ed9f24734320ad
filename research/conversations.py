"""
In-memory conversation store for the chat transport.

Conversations are keyed by an opaque id chosen by the client. Nothing
survives a restart; the research core never touches this module, the
transport injects a store where it needs one.

Listeners subscribe to a conversation and receive every message appended
after the subscription on their own ``queue.Queue``.
"""

from __future__ import annotations

import itertools
import logging
import queue
import threading
from datetime import datetime, timezone
from typing import Optional, Protocol

from research.models import ChatMessage

logger = logging.getLogger(__name__)


class ConversationStore(Protocol):
    """Keyed message storage used by the transport layer."""

    def history(self, conversation_id: str) -> list[ChatMessage]: ...

    def append(
        self,
        conversation_id: str,
        type: str,
        content: str,
        agent: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> ChatMessage: ...

    def subscribe(self, conversation_id: str) -> tuple[list[ChatMessage], queue.Queue]: ...

    def unsubscribe(self, conversation_id: str, listener: queue.Queue) -> None: ...


class InMemoryConversationStore:
    """Thread-safe ``ConversationStore`` backed by a dict of lists."""

    def __init__(self) -> None:
        self._conversations: dict[str, list[ChatMessage]] = {}
        self._listeners: dict[str, list[queue.Queue]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def history(self, conversation_id: str) -> list[ChatMessage]:
        """Return a copy of the messages in *conversation_id*, oldest first."""
        with self._lock:
            return list(self._conversations.get(conversation_id, []))

    def append(
        self,
        conversation_id: str,
        type: str,
        content: str,
        agent: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> ChatMessage:
        """Store a new message, hand it to every listener and return it."""
        with self._lock:
            message = ChatMessage(
                id=next(self._ids),
                type=type,
                content=content,
                agent=agent,
                timestamp=timestamp or datetime.now(timezone.utc),
            )
            self._conversations.setdefault(conversation_id, []).append(message)
            for listener in self._listeners.get(conversation_id, []):
                listener.put(message)

        logger.info("Stored %s message id=%d in conversation=%r", type, message.id, conversation_id)
        return message

    def subscribe(self, conversation_id: str) -> tuple[list[ChatMessage], queue.Queue]:
        """Register a listener on *conversation_id*.

        Returns the history at the moment of subscribing together with the
        queue that will receive every later message, so a listener never
        misses nor duplicates a message.
        """
        listener: queue.Queue = queue.Queue()
        with self._lock:
            self._listeners.setdefault(conversation_id, []).append(listener)
            snapshot = list(self._conversations.get(conversation_id, []))
        logger.debug("Listener subscribed to conversation=%r", conversation_id)
        return snapshot, listener

    def unsubscribe(self, conversation_id: str, listener: queue.Queue) -> None:
        """Stop delivering messages to *listener*; unknown listeners are ignored."""
        with self._lock:
            listeners = self._listeners.get(conversation_id, [])
            if listener in listeners:
                listeners.remove(listener)
            if not listeners:
                self._listeners.pop(conversation_id, None)
        logger.debug("Listener left conversation=%r", conversation_id)

    def listener_count(self, conversation_id: str) -> int:
        with self._lock:
            return len(self._listeners.get(conversation_id, []))

    def __len__(self) -> int:
        with self._lock:
            return len(self._conversations)
