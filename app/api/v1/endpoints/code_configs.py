"""Widget code configuration endpoints, keyed by website API key."""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.models.code_config import CodeConfig
from app.schemas.code_config import CodeConfigCreate, CodeConfigOut, CodeConfigUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


async def _get_or_404(db: AsyncSession, api_key: str) -> CodeConfig:
    config = await db.get(CodeConfig, api_key)
    if not config:
        raise HTTPException(status_code=404, detail="Configuration not found")
    return config


@router.post("/", response_model=CodeConfigOut, status_code=201)
async def save_config(data: CodeConfigCreate, db: AsyncSession = Depends(get_db)):
    """Create or overwrite the configuration for an API key."""
    if not data.api_key:
        raise HTTPException(status_code=400, detail="API Key is required")

    fields = data.model_dump()
    config = await db.get(CodeConfig, data.api_key)
    if config is None:
        config = CodeConfig(**fields)
        db.add(config)
    else:
        for field, value in fields.items():
            setattr(config, field, value)
        config.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(config)
    logger.info("Code config saved for %s", config.website_name or "unnamed website")
    return config


@router.get("/", response_model=list[CodeConfigOut])
async def list_configs(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(CodeConfig).order_by(CodeConfig.created_at.desc()))
    return result.scalars().all()


@router.get("/{api_key}", response_model=CodeConfigOut)
async def get_config(api_key: str, db: AsyncSession = Depends(get_db)):
    return await _get_or_404(db, api_key)


@router.put("/{api_key}", response_model=CodeConfigOut)
async def update_config(api_key: str, data: CodeConfigUpdate, db: AsyncSession = Depends(get_db)):
    config = await _get_or_404(db, api_key)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(config, field, value)
    config.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(config)
    return config


@router.delete("/{api_key}", status_code=204)
async def delete_config(api_key: str, db: AsyncSession = Depends(get_db)):
    config = await _get_or_404(db, api_key)
    await db.delete(config)
    await db.commit()
