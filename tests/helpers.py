"""Canned Wikipedia/arXiv responses served through httpx.MockTransport."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from xml.sax.saxutils import escape

import httpx


ATOM_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n<feed xmlns="http://www.w3.org/2005/Atom">\n<title>arXiv Query</title>\n'


def atom_entry(title=None, summary=None, published=None) -> str:
    """Render one Atom ``<entry>``; ``None`` fields are left out entirely."""
    parts = ["<entry>", "<id>http://arxiv.org/abs/0000.00000v1</id>"]
    if title is not None:
        parts.append(f"<title>{escape(title)}</title>")
    if summary is not None:
        parts.append(f"<summary>{escape(summary)}</summary>")
    if published is not None:
        parts.append(f"<published>{published}</published>")
    parts.append("</entry>")
    return "\n".join(parts)


def atom_feed(*entries: str) -> str:
    return ATOM_HEADER + "\n".join(entries) + "\n</feed>"


def iso_days_ago(days: int) -> str:
    moment = datetime.now(timezone.utc) - timedelta(days=days)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


class FakeSources:
    """Stands in for Wikipedia and arXiv; records every request it serves."""

    def __init__(self, summary=None, feed=None, summary_status=200, feed_status=200):
        self.summary = summary
        self.feed = feed if feed is not None else atom_feed()
        self.summary_status = summary_status
        self.feed_status = feed_status
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "en.wikipedia.org":
            if self.summary is None:
                return httpx.Response(404, json={"title": "Not found."})
            return httpx.Response(
                self.summary_status,
                content=json.dumps({"title": "x", "extract": self.summary}),
                headers={"Content-Type": "application/json"},
            )
        if request.url.host == "export.arxiv.org":
            return httpx.Response(
                self.feed_status,
                text=self.feed,
                headers={"Content-Type": "application/atom+xml"},
            )
        return httpx.Response(500)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]
