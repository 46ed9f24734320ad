"""Reference summary lookup against the Wikipedia REST API."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from research.models import Lookup

logger = logging.getLogger(__name__)


async def fetch_summary(client: httpx.AsyncClient, base_url: str, topic: str) -> Lookup[str]:
    """Fetch the short prose summary ("extract") for *topic*.

    Args:
        client: HTTP client owned by the calling pipeline run.
        base_url: Summary endpoint, e.g. ``https://en.wikipedia.org/api/rest_v1/page/summary``.
        topic: The extracted topic; URL-encoded into the path.

    Returns:
        ``Lookup.success(extract)``, or ``Lookup.unavailable`` on a non-2xx
        status, a transport error or timeout, or a payload without an extract.
    """
    url = f"{base_url.rstrip('/')}/{quote(topic, safe='')}"
    logger.info("Reference lookup topic=%r", topic)

    try:
        resp = await client.get(url)
    except httpx.HTTPError as exc:
        logger.warning("Reference lookup failed for topic=%r: %s", topic, exc)
        return Lookup.unavailable(f"transport error: {exc.__class__.__name__}")

    if not resp.is_success:
        logger.warning("Reference lookup for topic=%r returned %d", topic, resp.status_code)
        return Lookup.unavailable(f"status {resp.status_code}")

    try:
        data = resp.json()
    except ValueError:
        logger.warning("Reference lookup for topic=%r returned invalid JSON", topic)
        return Lookup.unavailable("invalid JSON")

    extract = data.get("extract") if isinstance(data, dict) else None
    if not extract:
        return Lookup.unavailable("no extract")

    logger.info("Reference summary length: %d characters", len(extract))
    return Lookup.success(extract)
