"""Tests for the Gemini client and the upstream website sync client."""

import httpx
import pytest
from unittest.mock import MagicMock, patch

from app.core.config import settings
from app.services import gemini
from app.services.knowledge_base import KnowledgeEntry
from app.services.website_sync import (
    SyncError,
    fetch_remote_websites,
    mask_key,
    to_website_fields,
)


class FakeClient:
    """Stands in for httpx.AsyncClient; records calls and returns a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def _send(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response

    async def get(self, url, **kwargs):
        return await self._send("GET", url, **kwargs)

    async def post(self, url, **kwargs):
        return await self._send("POST", url, **kwargs)


def _response(payload):
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = payload
    return resp


def test_build_prompt_lists_facts():
    prompt = gemini.build_prompt(
        "do you do logos?",
        "Pixel Studio",
        ["Web Development"],
        [KnowledgeEntry("Services", ["Web Design", "SEO"])],
    )
    assert "Pixel Studio" in prompt
    assert "Only answer questions about: Web Development" in prompt
    assert "Services:\n- Web Design\n- SEO" in prompt
    assert prompt.endswith("Visitor question: do you do logos?")


def test_build_prompt_without_facts():
    prompt = gemini.build_prompt("hi", "", ["General"], [])
    assert "No additional information available" in prompt
    assert "this business" in prompt


@pytest.mark.asyncio
async def test_generate_text_not_configured():
    with patch.object(settings, "GEMINI_API_KEY", ""):
        assert await gemini.generate_text("prompt") == ""


@pytest.mark.asyncio
async def test_generate_text_returns_candidate():
    fake = FakeClient(_response({"candidates": [{"content": {"parts": [{"text": " Yes we do. "}]}}]}))
    with patch.object(settings, "GEMINI_API_KEY", "g-key"), patch(
        "app.services.gemini.httpx.AsyncClient", return_value=fake
    ):
        assert await gemini.generate_text("prompt") == "Yes we do."

    method, _, kwargs = fake.calls[0]
    assert method == "POST"
    assert kwargs["params"] == {"key": "g-key"}
    assert kwargs["json"]["contents"][0]["parts"][0]["text"] == "prompt"


@pytest.mark.asyncio
@pytest.mark.parametrize("fake", [
    FakeClient(_response({"candidates": []})),
    FakeClient(_response({"error": "quota"})),
    FakeClient(error=httpx.ConnectError("down")),
])
async def test_generate_text_failures_return_empty(fake):
    with patch.object(settings, "GEMINI_API_KEY", "g-key"), patch(
        "app.services.gemini.httpx.AsyncClient", return_value=fake
    ):
        assert await gemini.generate_text("prompt") == ""


def test_mask_key():
    assert mask_key("backend-secret") == "***cret"
    assert mask_key(None) == "missing"


@pytest.mark.asyncio
async def test_fetch_remote_websites():
    fake = FakeClient(_response({"items": [{"id": "a"}, "junk", {"id": "b"}]}))
    with patch("app.services.website_sync.httpx.AsyncClient", return_value=fake):
        items = await fetch_remote_websites("https://admin.example.com/", "secret")

    assert items == [{"id": "a"}, {"id": "b"}]
    method, url, kwargs = fake.calls[0]
    assert url == "https://admin.example.com/api/websites"
    assert kwargs["headers"]["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_fetch_remote_websites_unexpected_body():
    fake = FakeClient(_response(["not", "an", "object"]))
    with patch("app.services.website_sync.httpx.AsyncClient", return_value=fake):
        assert await fetch_remote_websites("https://admin.example.com", "secret") == []


@pytest.mark.asyncio
async def test_fetch_remote_websites_error():
    fake = FakeClient(error=httpx.ConnectError("down"))
    with patch("app.services.website_sync.httpx.AsyncClient", return_value=fake):
        with pytest.raises(SyncError):
            await fetch_remote_websites("https://admin.example.com", "secret")


def test_to_website_fields_accepts_both_casings():
    fields = to_website_fields({
        "id": "w1",
        "websiteName": "Remote",
        "website_url": "https://remote.example.com",
        "apiKey": "k",
        "ignored": True,
    })
    assert fields == {
        "id": "w1",
        "website_name": "Remote",
        "website_url": "https://remote.example.com",
        "api_key": "k",
    }
