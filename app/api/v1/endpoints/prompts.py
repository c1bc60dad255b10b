"""Prompt set endpoints.

Prompt sets are keyed by (website_id, prompt_name).

- POST /api/v1/prompts/ → save (create or overwrite)
- GET /api/v1/prompts/by-backend-key/{backend_api_key}
- GET /api/v1/prompts/{website_id} → list a website's prompt sets
- GET|PATCH|DELETE /api/v1/prompts/{website_id}/{prompt_name}
- PUT /api/v1/prompts/{website_id}/{prompt_name}/name → rename
- GET /api/v1/prompts/{website_id}/{prompt_name}/validate/{api_key}
- POST|DELETE|PUT /api/v1/prompts/{website_id}/{prompt_name}/api-keys
- PUT|DELETE /api/v1/prompts/{website_id}/{prompt_name}/backend-key
- POST /api/v1/prompts/{website_id}/{prompt_name}/params
- GET|PUT|DELETE /api/v1/prompts/{website_id}/{prompt_name}/params/{promptname}
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.models.prompt_set import PromptSet
from app.schemas.prompt_set import (
    ApiKeyBody,
    ApiKeysBody,
    ApiKeyValidationOut,
    BackendApiKeyBody,
    PromptRename,
    PromptSetCreate,
    PromptSetOut,
    PromptSetUpdate,
    PromptWithParams,
)

router = APIRouter()
logger = logging.getLogger(__name__)


async def _get(db: AsyncSession, website_id: str, prompt_name: str) -> PromptSet | None:
    return await db.get(PromptSet, (website_id.strip(), prompt_name.strip()))


async def _get_or_404(db: AsyncSession, website_id: str, prompt_name: str) -> PromptSet:
    prompt_set = await _get(db, website_id, prompt_name)
    if not prompt_set:
        raise HTTPException(status_code=404, detail="Prompt set not found")
    return prompt_set


async def _commit(db: AsyncSession, prompt_set: PromptSet) -> PromptSet:
    prompt_set.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(prompt_set)
    return prompt_set


@router.post("/", response_model=PromptSetOut)
async def save_prompt_set(data: PromptSetCreate, db: AsyncSession = Depends(get_db)):
    """Create a prompt set, or overwrite the one with the same key."""
    fields = data.model_dump()
    fields["website_id"] = data.website_id.strip()
    fields["prompt_name"] = data.prompt_name.strip()

    prompt_set = await _get(db, data.website_id, data.prompt_name)
    if prompt_set is None:
        prompt_set = PromptSet(**fields)
        db.add(prompt_set)
    else:
        for field, value in fields.items():
            setattr(prompt_set, field, value)
    logger.info("Prompt set saved: %s/%s", fields["website_id"], fields["prompt_name"])
    return await _commit(db, prompt_set)


@router.get("/by-backend-key/{backend_api_key}", response_model=list[PromptSetOut])
async def list_by_backend_key(backend_api_key: str, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(PromptSet).where(PromptSet.backend_api_key == backend_api_key))
    return result.scalars().all()


@router.get("/{website_id}", response_model=list[PromptSetOut])
async def list_prompt_sets(website_id: str, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(PromptSet)
        .where(PromptSet.website_id == website_id.strip())
        .order_by(PromptSet.prompt_name)
    )
    return result.scalars().all()


@router.get("/{website_id}/{prompt_name}", response_model=PromptSetOut)
async def get_prompt_set(website_id: str, prompt_name: str, db: AsyncSession = Depends(get_db)):
    return await _get_or_404(db, website_id, prompt_name)


@router.patch("/{website_id}/{prompt_name}", response_model=PromptSetOut)
async def update_prompt_set(
    website_id: str,
    prompt_name: str,
    data: PromptSetUpdate,
    db: AsyncSession = Depends(get_db),
):
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    for field, value in data.model_dump(exclude_unset=True).items():
        # list columns are not nullable; only summary_list may be cleared
        if value is None and field != "summary_list":
            continue
        setattr(prompt_set, field, value)
    return await _commit(db, prompt_set)


@router.put("/{website_id}/{prompt_name}/name", response_model=PromptSetOut)
async def rename_prompt_set(
    website_id: str,
    prompt_name: str,
    data: PromptRename,
    db: AsyncSession = Depends(get_db),
):
    new_name = (data.new_prompt_name or "").strip()
    if not new_name:
        raise HTTPException(status_code=400, detail="new_prompt_name is required")

    old = await _get(db, website_id, prompt_name)
    if not old:
        raise HTTPException(
            status_code=404,
            detail=f'Prompt "{prompt_name.strip()}" not found for website {website_id.strip()}',
        )
    if await _get(db, website_id, new_name):
        raise HTTPException(
            status_code=409,
            detail=f'Prompt "{new_name}" already exists for website {website_id.strip()}',
        )

    renamed = PromptSet(
        website_id=old.website_id,
        prompt_name=new_name,
        summary_list=old.summary_list,
        prompts=list(old.prompts or []),
        prompts_with_params=list(old.prompts_with_params or []),
        urls=list(old.urls or []),
        backend_api_key=old.backend_api_key,
        api_keys=list(old.api_keys or []),
        created_at=old.created_at,
    )
    await db.delete(old)
    db.add(renamed)
    logger.info("Prompt set renamed: %s/%s → %s", old.website_id, old.prompt_name, new_name)
    return await _commit(db, renamed)


@router.delete("/{website_id}/{prompt_name}")
async def delete_prompt_set(website_id: str, prompt_name: str, db: AsyncSession = Depends(get_db)):
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    await db.delete(prompt_set)
    await db.commit()
    return {"message": "Prompt deleted successfully"}


# API keys

@router.get("/{website_id}/{prompt_name}/validate/{api_key}", response_model=ApiKeyValidationOut)
async def validate_api_key(
    website_id: str,
    prompt_name: str,
    api_key: str,
    db: AsyncSession = Depends(get_db),
):
    prompt_set = await _get(db, website_id, prompt_name)
    if not prompt_set:
        raise HTTPException(status_code=401, detail="Prompt set not found")
    if not prompt_set.api_keys:
        raise HTTPException(status_code=401, detail="No API keys configured")
    if api_key not in prompt_set.api_keys:
        raise HTTPException(status_code=401, detail="Invalid API key")
    return ApiKeyValidationOut(valid=True, data=prompt_set)


@router.post("/{website_id}/{prompt_name}/api-keys", response_model=PromptSetOut)
async def add_api_key(
    website_id: str,
    prompt_name: str,
    data: ApiKeyBody,
    db: AsyncSession = Depends(get_db),
):
    if not data.api_key:
        raise HTTPException(status_code=400, detail="api_key is required")
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    keys = list(prompt_set.api_keys or [])
    if data.api_key not in keys:
        keys.append(data.api_key)
    prompt_set.api_keys = keys
    return await _commit(db, prompt_set)


@router.delete("/{website_id}/{prompt_name}/api-keys", response_model=PromptSetOut)
async def remove_api_key(
    website_id: str,
    prompt_name: str,
    data: ApiKeyBody,
    db: AsyncSession = Depends(get_db),
):
    if not data.api_key:
        raise HTTPException(status_code=400, detail="api_key is required")
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    prompt_set.api_keys = [k for k in prompt_set.api_keys or [] if k != data.api_key]
    return await _commit(db, prompt_set)


@router.put("/{website_id}/{prompt_name}/api-keys", response_model=PromptSetOut)
async def replace_api_keys(
    website_id: str,
    prompt_name: str,
    data: ApiKeysBody,
    db: AsyncSession = Depends(get_db),
):
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    prompt_set.api_keys = list(data.api_keys or [])
    return await _commit(db, prompt_set)


@router.put("/{website_id}/{prompt_name}/backend-key", response_model=PromptSetOut)
async def set_backend_key(
    website_id: str,
    prompt_name: str,
    data: BackendApiKeyBody,
    db: AsyncSession = Depends(get_db),
):
    if not data.backend_api_key:
        raise HTTPException(status_code=400, detail="backend_api_key is required")
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    prompt_set.backend_api_key = data.backend_api_key
    return await _commit(db, prompt_set)


@router.delete("/{website_id}/{prompt_name}/backend-key", response_model=PromptSetOut)
async def clear_backend_key(website_id: str, prompt_name: str, db: AsyncSession = Depends(get_db)):
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    prompt_set.backend_api_key = None
    return await _commit(db, prompt_set)


# Parameterised prompts

def _find_param(prompt_set: PromptSet, promptname: str) -> dict:
    for item in prompt_set.prompts_with_params or []:
        if item.get("promptname") == promptname:
            return item
    raise HTTPException(status_code=404, detail=f'Prompt "{promptname}" not found')


@router.post("/{website_id}/{prompt_name}/params", response_model=PromptSetOut)
async def add_prompt_with_params(
    website_id: str,
    prompt_name: str,
    data: PromptWithParams,
    db: AsyncSession = Depends(get_db),
):
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    prompt_set.prompts_with_params = [*(prompt_set.prompts_with_params or []), data.model_dump()]
    return await _commit(db, prompt_set)


@router.get("/{website_id}/{prompt_name}/params/{promptname}")
async def get_prompt_with_params(
    website_id: str,
    prompt_name: str,
    promptname: str,
    db: AsyncSession = Depends(get_db),
):
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    if not prompt_set.prompts_with_params:
        raise HTTPException(status_code=404, detail="No prompts configured")
    return {"prompt": _find_param(prompt_set, promptname), "full_set": PromptSetOut.model_validate(prompt_set)}


@router.put("/{website_id}/{prompt_name}/params/{promptname}", response_model=PromptSetOut)
async def update_prompt_with_params(
    website_id: str,
    prompt_name: str,
    promptname: str,
    data: dict,
    db: AsyncSession = Depends(get_db),
):
    """Shallow-merge new fields into one parameterised prompt."""
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    _find_param(prompt_set, promptname)
    prompt_set.prompts_with_params = [
        {**item, **data} if item.get("promptname") == promptname else item
        for item in prompt_set.prompts_with_params
    ]
    return await _commit(db, prompt_set)


@router.delete("/{website_id}/{prompt_name}/params/{promptname}", response_model=PromptSetOut)
async def remove_prompt_with_params(
    website_id: str,
    prompt_name: str,
    promptname: str,
    db: AsyncSession = Depends(get_db),
):
    prompt_set = await _get_or_404(db, website_id, prompt_name)
    _find_param(prompt_set, promptname)
    prompt_set.prompts_with_params = [
        item for item in prompt_set.prompts_with_params if item.get("promptname") != promptname
    ]
    return await _commit(db, prompt_set)
