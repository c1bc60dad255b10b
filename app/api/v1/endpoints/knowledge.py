"""Knowledge base endpoints for a website.

- GET|PUT|DELETE /api/v1/websites/{id}/knowledge-base → read, replace, clear
- POST /api/v1/websites/{id}/knowledge-base/items → add (merged by title)
- GET /api/v1/websites/{id}/knowledge-base/titles → entry titles in order
- GET|PUT|DELETE /api/v1/websites/{id}/knowledge-base/items/{title}
- DELETE /api/v1/websites/{id}/knowledge-base/items/{title}/values/{value}

Titles in paths are matched case-insensitively.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import get_website_or_404
from app.models.website import Website
from app.schemas.knowledge import (
    KnowledgeBaseOut,
    KnowledgeBasePayload,
    KnowledgeItemOut,
    KnowledgeItemUpdate,
    KnowledgeTitlesOut,
)
from app.services.knowledge_base import (
    KnowledgeEntry,
    coerce_values,
    dump_knowledge_base,
    entry_titles,
    find_entry,
    load_knowledge_base,
    merge_knowledge_base,
    normalize_knowledge_base,
    remove_entry,
    remove_value,
    replace_entry,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _out(website: Website) -> KnowledgeBaseOut:
    return KnowledgeBaseOut(website_id=website.id, knowledge_base=website.knowledge_base or [])


async def _save(db: AsyncSession, website: Website, entries: list[KnowledgeEntry]) -> KnowledgeBaseOut:
    # assign a fresh list so the JSON column is flagged dirty
    website.knowledge_base = dump_knowledge_base(entries)
    website.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(website)
    return _out(website)


def _entry_or_404(entries: list[KnowledgeEntry], title: str) -> KnowledgeEntry:
    entry = find_entry(entries, title)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Knowledge item '{title}' not found")
    return entry


@router.get("/{website_id}/knowledge-base", response_model=KnowledgeBaseOut)
async def get_knowledge_base(website: Website = Depends(get_website_or_404)):
    return _out(website)


@router.put("/{website_id}/knowledge-base", response_model=KnowledgeBaseOut)
async def replace_knowledge_base(
    payload: KnowledgeBasePayload,
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Replace the whole knowledge base with a normalized copy of the payload."""
    entries = merge_knowledge_base([], normalize_knowledge_base(payload.knowledge_base))
    logger.info("Knowledge base replaced for %s: %d entries", website.id, len(entries))
    return await _save(db, website, entries)


@router.delete("/{website_id}/knowledge-base", response_model=KnowledgeBaseOut)
async def clear_knowledge_base(
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    logger.info("Knowledge base cleared for %s", website.id)
    return await _save(db, website, [])


@router.post("/{website_id}/knowledge-base/items", response_model=KnowledgeBaseOut)
async def add_knowledge_items(
    payload: KnowledgeBasePayload,
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Normalize the payload and merge it into the existing knowledge base."""
    incoming = normalize_knowledge_base(payload.knowledge_base)
    if not incoming:
        raise HTTPException(status_code=400, detail="No knowledge items found in payload")
    entries = merge_knowledge_base(load_knowledge_base(website.knowledge_base), incoming)
    return await _save(db, website, entries)


@router.get("/{website_id}/knowledge-base/titles", response_model=KnowledgeTitlesOut)
async def list_knowledge_titles(website: Website = Depends(get_website_or_404)):
    entries = load_knowledge_base(website.knowledge_base)
    return KnowledgeTitlesOut(website_id=website.id, titles=entry_titles(entries))


@router.get("/{website_id}/knowledge-base/items/{title}", response_model=KnowledgeItemOut)
async def get_knowledge_item(title: str, website: Website = Depends(get_website_or_404)):
    entry = _entry_or_404(load_knowledge_base(website.knowledge_base), title)
    return KnowledgeItemOut(**entry.to_dict())


@router.put("/{website_id}/knowledge-base/items/{title}", response_model=KnowledgeBaseOut)
async def update_knowledge_item(
    title: str,
    data: KnowledgeItemUpdate,
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Replace an entry's values, optionally renaming it.

    Renaming onto another existing title merges the two entries.
    """
    entries = load_knowledge_base(website.knowledge_base)
    current = _entry_or_404(entries, title)

    values = coerce_values(data.value)
    if not values:
        raise HTTPException(status_code=400, detail="At least one value is required")

    new_title = (data.title or "").strip() or current.title
    entries = replace_entry(entries, title, KnowledgeEntry(title=new_title, values=values))
    return await _save(db, website, entries)


@router.delete("/{website_id}/knowledge-base/items/{title}", response_model=KnowledgeBaseOut)
async def delete_knowledge_item(
    title: str,
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    entries = load_knowledge_base(website.knowledge_base)
    _entry_or_404(entries, title)
    return await _save(db, website, remove_entry(entries, title))


@router.delete(
    "/{website_id}/knowledge-base/items/{title}/values/{value:path}",
    response_model=KnowledgeBaseOut,
)
async def delete_knowledge_value(
    title: str,
    value: str,
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Remove one value; the entry disappears with its last value."""
    entries = load_knowledge_base(website.knowledge_base)
    entry = _entry_or_404(entries, title)
    if value not in entry.values:
        raise HTTPException(status_code=404, detail=f"Value '{value}' not found in '{entry.title}'")
    return await _save(db, website, remove_value(entries, title, value))
