"""FastAPI dependencies for resolving websites."""

from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.models.website import Website


def api_key_from_request(
    api_key: str | None = Query(None),
    x_api_key: str | None = Header(None),
) -> str | None:
    """Widget clients send their key either as ?api_key= or an X-API-Key header."""
    return api_key or x_api_key


async def find_website_by_api_key(db: AsyncSession, api_key: str) -> Website | None:
    result = await db.execute(select(Website).where(Website.api_key == api_key))
    return result.scalars().first()


async def get_website_or_404(
    website_id: str,
    db: AsyncSession = Depends(get_db),
) -> Website:
    result = await db.execute(select(Website).where(Website.id == website_id))
    website = result.scalar_one_or_none()
    if not website:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Website not found")
    return website
