"""Website CRUD endpoints.

- POST /api/v1/websites/ → register a website (knowledge base starts empty)
- GET /api/v1/websites/ → list websites, or the one matching an API key
- GET /api/v1/websites/by-api-key → website for an API key
- GET|PUT|DELETE /api/v1/websites/{id}
- PATCH /api/v1/websites/{id}/custom-data, /status
- POST /api/v1/websites/sync → pull websites from an upstream backend
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.core.deps import api_key_from_request, find_website_by_api_key, get_website_or_404
from app.models.website import Website, WebsiteStatus
from app.schemas.website import (
    WebsiteCreate,
    WebsiteCustomDataUpdate,
    WebsiteOut,
    WebsiteStatusUpdate,
    WebsiteSyncOut,
    WebsiteSyncRequest,
    WebsiteUpdate,
)
from app.services.website_sync import SyncError, fetch_remote_websites, mask_key, to_website_fields

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=WebsiteOut, status_code=201)
async def create_website(
    data: WebsiteCreate,
    db: AsyncSession = Depends(get_db),
):
    """Register a website for the chat widget."""
    fields = data.model_dump(mode="json", exclude_none=True)
    if data.api_key and await find_website_by_api_key(db, data.api_key):
        raise HTTPException(status_code=409, detail="API key already in use")
    if data.id and await db.get(Website, data.id):
        raise HTTPException(status_code=409, detail=f"Website {data.id} already exists")

    website = Website(**fields, knowledge_base=[])
    db.add(website)
    await db.commit()
    await db.refresh(website)
    logger.info("Website created: %s (%s)", website.id, website.website_name)
    return website


@router.get("/", response_model=list[WebsiteOut])
async def list_websites(
    api_key: str | None = Depends(api_key_from_request),
    db: AsyncSession = Depends(get_db),
):
    """List all websites, or just the one an API key belongs to."""
    if api_key:
        website = await find_website_by_api_key(db, api_key)
        if not website:
            raise HTTPException(status_code=404, detail="No website found with this API key")
        return [website]

    result = await db.execute(select(Website).order_by(Website.created_at.desc()))
    return result.scalars().all()


@router.get("/by-api-key", response_model=WebsiteOut)
async def get_website_by_api_key(
    api_key: str | None = Depends(api_key_from_request),
    db: AsyncSession = Depends(get_db),
):
    if not api_key:
        raise HTTPException(status_code=400, detail="Missing api_key")
    website = await find_website_by_api_key(db, api_key)
    if not website:
        raise HTTPException(status_code=404, detail="No website found with this API key")
    return website


@router.post("/sync", response_model=WebsiteSyncOut)
async def sync_websites(
    data: WebsiteSyncRequest,
    db: AsyncSession = Depends(get_db),
):
    """Fetch websites from an upstream backend and upsert them locally.

    Records are matched on id, then api_key. Knowledge bases are left alone.
    """
    if not data.api_base_url or not data.backend_api_key:
        raise HTTPException(status_code=400, detail="Missing api_base_url or backend_api_key")

    try:
        items = await fetch_remote_websites(data.api_base_url, data.backend_api_key)
    except SyncError as e:
        raise HTTPException(status_code=502, detail=str(e))

    if not items:
        raise HTTPException(status_code=404, detail="No websites found")

    synced = 0
    for item in items:
        try:
            fields = WebsiteCreate(**to_website_fields(item)).model_dump(mode="json", exclude_none=True)
        except ValueError as e:
            logger.warning("Skipping unparseable upstream website: %s", e)
            continue

        website = await db.get(Website, fields["id"]) if fields.get("id") else None
        if website is None and fields.get("api_key"):
            website = await find_website_by_api_key(db, fields["api_key"])

        if website is None:
            db.add(Website(**fields, knowledge_base=[]))
        else:
            fields.pop("id", None)
            for field, value in fields.items():
                setattr(website, field, value)
        await db.flush()
        synced += 1

    await db.commit()
    logger.info("Synced %d websites from %s (key %s)", synced, data.api_base_url, mask_key(data.backend_api_key))

    result = await db.execute(select(Website).order_by(Website.created_at.desc()))
    return WebsiteSyncOut(
        message=f"Fetched and synced {synced} websites",
        synced=synced,
        items=result.scalars().all(),
    )


@router.get("/{website_id}", response_model=WebsiteOut)
async def get_website(website: Website = Depends(get_website_or_404)):
    return website


@router.put("/{website_id}", response_model=WebsiteOut)
async def update_website(
    data: WebsiteUpdate,
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Replace every editable field; omitted fields go back to their defaults."""
    for field, value in data.model_dump(mode="json").items():
        setattr(website, field, value)
    website.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(website)
    return website


@router.patch("/{website_id}/custom-data", response_model=WebsiteOut)
async def update_custom_data(
    data: WebsiteCustomDataUpdate,
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    website.custom_prompt = data.custom_prompt
    website.urls = data.urls
    website.library = data.library
    website.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(website)
    return website


@router.patch("/{website_id}/status", response_model=WebsiteOut)
async def update_status(
    data: WebsiteStatusUpdate,
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    if data.status not in [s.value for s in WebsiteStatus]:
        raise HTTPException(status_code=400, detail="Invalid status")
    website.status = data.status
    website.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(website)
    return website


@router.delete("/{website_id}", status_code=204)
async def delete_website(
    website: Website = Depends(get_website_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Delete a website together with its knowledge base."""
    await db.delete(website)
    await db.commit()
    logger.info("Website deleted: %s", website.id)
