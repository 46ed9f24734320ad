"""
Flask web server for Research Brief.

Routes
──────
GET  /api/health                         Liveness check (JSON)
GET  /api/conversation/<id>              Stored messages of a conversation (JSON)
GET  /api/conversation/<id>/stream       Live message feed of a conversation (SSE)
POST /api/conversation/<id>/messages     Send a message, store it and the answer (JSON)
POST /api/message                        One-off question → {content, agent, confidence}
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import queue
import sys
from datetime import datetime
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request, stream_with_context

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from research.conversations import ConversationStore, InMemoryConversationStore
from research.router import Router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

#: Seconds between SSE keep-alive comments on an idle conversation stream.
KEEPALIVE_SECONDS = 15.0


def _message_text() -> Optional[str]:
    payload = request.get_json(silent=True) or {}
    message = payload.get("message")
    if not isinstance(message, str) or not message.strip():
        return None
    return message


def _parse_timestamp(raw: object) -> Optional[datetime]:
    """Parse an optional ISO-8601 client timestamp; raises ``ValueError`` if malformed."""
    if raw in (None, ""):
        return None
    if not isinstance(raw, str):
        raise ValueError("timestamp must be an ISO-8601 string")
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ConversationStore] = None,
    router: Optional[Router] = None,
) -> Flask:
    """Build the Flask app with its conversation store and query router."""
    settings = settings or Settings()
    settings.validate()
    store = store if store is not None else InMemoryConversationStore()
    router = router or Router(settings)

    app = Flask(__name__)

    # ── Health ─────────────────────────────────────────────────────────────

    @app.route("/api/health")
    def health():
        return jsonify({"status": "OK", "message": "Research Brief API is running"})

    # ── Conversations ──────────────────────────────────────────────────────

    @app.route("/api/conversation/<conversation_id>")
    def get_conversation(conversation_id: str):
        """Return every message stored for *conversation_id* (empty list if new)."""
        messages = store.history(conversation_id)
        return jsonify([m.model_dump(mode="json") for m in messages])

    @app.route("/api/conversation/<conversation_id>/stream")
    def stream_conversation(conversation_id: str):
        """
        Server-Sent Events stream of a conversation.

        SSE events emitted:
          {"type": "history", "messages": [...]}    messages stored so far
          {"type": "message", "data": {...}}        each message stored afterwards

        Idle streams receive a ``: keep-alive`` comment every
        ``KEEPALIVE_SECONDS``; the listener is dropped when the client leaves.
        """
        def generate():
            snapshot, listener = store.subscribe(conversation_id)
            try:
                data = json.dumps({
                    "type": "history",
                    "messages": [m.model_dump(mode="json") for m in snapshot],
                })
                yield f"data: {data}\n\n"

                while True:
                    try:
                        message = listener.get(timeout=KEEPALIVE_SECONDS)
                    except queue.Empty:
                        yield ": keep-alive\n\n"
                        continue
                    data = json.dumps({"type": "message", "data": message.model_dump(mode="json")})
                    yield f"data: {data}\n\n"
            finally:
                store.unsubscribe(conversation_id, listener)

        return Response(
            stream_with_context(generate()),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    @app.route("/api/conversation/<conversation_id>/messages", methods=["POST"])
    def send_message(conversation_id: str):
        """Store the user's message, answer it, store and return both messages."""
        message = _message_text()
        if message is None:
            return jsonify({"error": "message is required"}), 400
        try:
            timestamp = _parse_timestamp((request.get_json(silent=True) or {}).get("timestamp"))
        except ValueError as exc:
            return jsonify({"error": f"invalid timestamp: {exc}"}), 400

        user_message = store.append(conversation_id, "user", message, timestamp=timestamp)
        response = asyncio.run(router.process_query(message))
        bot_message = store.append(conversation_id, "bot", response.content, agent=response.agent)

        return jsonify({
            "user": user_message.model_dump(mode="json"),
            "bot": bot_message.model_dump(mode="json"),
            "confidence": response.confidence,
        })

    # ── One-off questions ──────────────────────────────────────────────────

    @app.route("/api/message", methods=["POST"])
    def message_endpoint():
        """Answer a single question without storing it."""
        message = _message_text()
        if message is None:
            return jsonify({"error": "message is required"}), 400
        response = asyncio.run(router.process_query(message))
        return jsonify(response.model_dump())

    return app


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    settings = Settings()
    app = create_app(settings)
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
