"""Chat widget answer endpoints.

- POST /api/v1/ai/generate-ai-response → answer a visitor question
- POST /api/v1/ai/direct-response → deterministic answer plus match details
- POST /api/v1/ai/validate-api-key → check a widget API key
- GET /api/v1/ai/health
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.deps import find_website_by_api_key
from app.models.website import DEFAULT_CATEGORIES, Website
from app.schemas.ai import AIQuestion, AIResponseOut, ApiKeyCheck, DirectResponseOut
from app.services import gemini
from app.services.intent import is_category_related
from app.services.knowledge_base import entry_titles, load_knowledge_base
from app.services.matcher import classify_and_match
from app.services.personality import apply_personality
from app.services.responder import compose_response

router = APIRouter()
logger = logging.getLogger(__name__)


def _categories(website: Website) -> list[str]:
    stored = website.category if isinstance(website.category, list) else []
    categories = [c.strip() for c in stored if isinstance(c, str) and c.strip()]
    return categories or list(DEFAULT_CATEGORIES)



async def _website_for_question(data: AIQuestion, db: AsyncSession) -> Website:
    if not data.question or not data.question.strip():
        raise HTTPException(status_code=400, detail="Please provide a question")
    if not data.api_key:
        raise HTTPException(status_code=400, detail="API key is required")
    website = await find_website_by_api_key(db, data.api_key)
    if not website:
        raise HTTPException(status_code=404, detail="Invalid API key or website not found")
    return website


@router.post("/generate-ai-response", response_model=AIResponseOut)
async def generate_ai_response(
    data: AIQuestion,
    db: AsyncSession = Depends(get_db),
):
    """Answer from the knowledge base, asking Gemini only when nothing matches."""
    website = await _website_for_question(data, db)
    question = data.question.strip()
    categories = _categories(website)
    entries = load_knowledge_base(website.knowledge_base)

    match = classify_and_match(question, entries)

    if not match.is_match and gemini.is_configured() and is_category_related(question, categories):
        prompt = gemini.build_prompt(question, website.website_name, categories, entries)
        generated = await gemini.generate_text(prompt)
        if generated:
            logger.info("Gemini answered for website %s", website.id)
            return AIResponseOut(response=apply_personality(generated, data.personality))

    response = compose_response(
        match,
        categories,
        data.personality,
        question=question,
        knowledge_base=entries,
    )
    logger.info("Answered for website %s (%s)", website.id, match.match_kind.value)
    return AIResponseOut(response=response)


@router.post("/direct-response", response_model=DirectResponseOut)
async def direct_response(
    data: AIQuestion,
    db: AsyncSession = Depends(get_db),
):
    """Knowledge-base-only answer with details about what matched."""
    website = await _website_for_question(data, db)
    question = data.question.strip()
    categories = _categories(website)
    entries = load_knowledge_base(website.knowledge_base)

    match = classify_and_match(question, entries)
    if match.is_match:
        response = compose_response(match, categories, question=question, knowledge_base=entries)
        if match.is_title_match:
            matched = {"title": match.entry_title, "values": list(match.matched_values)}
        else:
            matched = {"title": match.entry_title, "value": match.matched_values[0]}
        return DirectResponseOut(
            response=response,
            has_match=True,
            match_type=match.match_kind.value,
            matched_data=matched,
        )

    titles = entry_titles(entries)
    response = f"I can help you with information about our {', '.join(categories)}. "
    if titles:
        response += f"We have data about: {', '.join(titles)}. Try asking about any of these."
    else:
        response += "Please ask about our services or products."
    return DirectResponseOut(
        response=response,
        has_match=False,
        available_titles=titles,
        available_categories=categories,
    )


@router.post("/validate-api-key")
async def validate_api_key(
    data: ApiKeyCheck,
    db: AsyncSession = Depends(get_db),
):
    if not data.api_key:
        raise HTTPException(status_code=400, detail="API key is required")

    website = await find_website_by_api_key(db, data.api_key)
    if not website:
        return {"success": True, "valid": False, "message": "Invalid API key"}

    entries = load_knowledge_base(website.knowledge_base)
    return {
        "success": True,
        "valid": True,
        "website": {
            "name": website.website_name,
            "url": website.website_url,
            "categories": _categories(website),
            "has_knowledge_base": bool(entries),
            "available_titles": entry_titles(entries),
        },
    }


@router.get("/health")
async def ai_health():
    return {
        "success": True,
        "message": "AI Response API is running",
        "timestamp": datetime.utcnow().isoformat(),
        "has_api_key": gemini.is_configured(),
        "environment": settings.APP_ENV,
    }
