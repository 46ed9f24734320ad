"""Tests for research/reference.py — Wikipedia summary lookup."""

from __future__ import annotations

import httpx
import pytest

from helpers import FakeSources
from research.reference import fetch_summary

WIKI = "https://en.wikipedia.org/api/rest_v1/page/summary"


async def _lookup(transport, topic="entropy"):
    async with httpx.AsyncClient(transport=transport) as client:
        return await fetch_summary(client, WIKI, topic)


class TestFetchSummary:
    @pytest.mark.asyncio
    async def test_returns_extract(self):
        sources = FakeSources(summary="Entropy measures disorder.")
        result = await _lookup(sources.transport)
        assert result.ok
        assert result.value == "Entropy measures disorder."

    @pytest.mark.asyncio
    async def test_topic_is_url_encoded(self):
        sources = FakeSources(summary="x")
        await _lookup(sources.transport, topic="dark matter/energy")
        assert sources.requests[0].url.raw_path == b"/api/rest_v1/page/summary/dark%20matter%2Fenergy"

    @pytest.mark.asyncio
    async def test_not_found_is_unavailable(self):
        result = await _lookup(FakeSources(summary=None).transport)
        assert not result.ok
        assert result.reason == "status 404"

    @pytest.mark.asyncio
    async def test_missing_extract_is_unavailable(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"title": "x"}))
        result = await _lookup(transport)
        assert not result.ok
        assert result.value is None

    @pytest.mark.asyncio
    async def test_invalid_json_is_unavailable(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        assert not (await _lookup(transport)).ok

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        def slow(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        result = await _lookup(httpx.MockTransport(slow))
        assert not result.ok
        assert "ReadTimeout" in result.reason
