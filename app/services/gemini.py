"""Gemini generative-text client.

Used only as a last resort when the knowledge base has no answer. Returns
an empty string whenever Gemini is not configured or the call fails, and
the caller falls back to canned messaging.
"""

import logging

import httpx

from app.core.config import settings
from app.services.knowledge_base import KnowledgeEntry

logger = logging.getLogger(__name__)

GENERATION_CONFIG = {
    "temperature": 0.3,
    "maxOutputTokens": 200,
    "topP": 0.8,
    "topK": 40,
}

SAFETY_SETTINGS = [
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
]


def is_configured() -> bool:
    return bool(settings.GEMINI_API_KEY)


def build_prompt(
    question: str,
    website_name: str,
    categories: list[str],
    entries: list[KnowledgeEntry],
) -> str:
    facts = "\n".join(
        f"{e.title}:\n" + "\n".join(f"- {v}" for v in e.values) for e in entries
    ) or "No additional information available"
    return (
        f"You are the website assistant for {website_name or 'this business'}. "
        f"Only answer questions about: {', '.join(str(c) for c in categories)}.\n\n"
        f"Known facts:\n{facts}\n\n"
        f"Answer the visitor in two or three short sentences using only the facts above. "
        f"If the facts do not cover the question, say so politely.\n\n"
        f"Visitor question: {question}"
    )


async def generate_text(prompt: str) -> str:
    if not is_configured():
        logger.warning("Gemini not configured - skipping AI generation")
        return ""

    payload = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": GENERATION_CONFIG,
        "safetySettings": SAFETY_SETTINGS,
    }
    try:
        async with httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT_SECONDS) as client:
            resp = await client.post(
                settings.GEMINI_API_URL,
                params={"key": settings.GEMINI_API_KEY},
                json=payload,
                headers={"Accept": "application/json"},
            )
            resp.raise_for_status()
            data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Gemini API error: %s", e)
        return ""

    try:
        return data["candidates"][0]["content"]["parts"][0]["text"].strip()
    except (KeyError, IndexError, TypeError, AttributeError):
        logger.warning("Gemini returned no candidate text")
        return ""
