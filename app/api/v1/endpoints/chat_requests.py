"""Chat request endpoints.

- POST /api/v1/chat-requests/ → store data a visitor left in the widget
- GET /api/v1/chat-requests/ → list (filter by backend key, website or status)
- GET /api/v1/chat-requests/stats → per-status counts
- GET /api/v1/chat-requests/test-connection → storage reachability check
- GET /api/v1/chat-requests/website/{website_id}
- GET /api/v1/chat-requests/backend/{backend_api_key}
- GET|DELETE /api/v1/chat-requests/{id}
- PUT /api/v1/chat-requests/{id}/status
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, text

from app.core.database import get_db
from app.models.chat_request import ChatRequest, ChatRequestStatus
from app.schemas.chat_request import (
    ChatRequestCreate,
    ChatRequestList,
    ChatRequestOut,
    ChatRequestStatusUpdate,
    ChatStatsOut,
)
from app.services.website_sync import mask_key

router = APIRouter()
logger = logging.getLogger(__name__)

STATS_SCAN_LIMIT = 1000


async def _list(db: AsyncSession, limit: int, **filters) -> list[ChatRequest]:
    query = select(ChatRequest)
    for column, value in filters.items():
        query = query.where(getattr(ChatRequest, column) == value)
    query = query.order_by(ChatRequest.created_at.desc()).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def _get_or_404(db: AsyncSession, request_id: str) -> ChatRequest:
    chat_request = await db.get(ChatRequest, request_id)
    if not chat_request:
        raise HTTPException(status_code=404, detail="Chat request not found")
    return chat_request


@router.post("/", response_model=ChatRequestOut, status_code=201)
async def create_chat_request(
    data: ChatRequestCreate,
    db: AsyncSession = Depends(get_db),
):
    if not data.website_id:
        raise HTTPException(status_code=400, detail="Website ID is required")
    if not data.backend_api_key:
        raise HTTPException(status_code=400, detail="Backend API Key is required")
    if not data.collected_data:
        raise HTTPException(status_code=400, detail="Collected data is required")

    chat_request = ChatRequest(
        website_id=data.website_id,
        backend_api_key=data.backend_api_key,
        collected_data=data.collected_data,
        status=data.status.value,
    )
    db.add(chat_request)
    await db.commit()
    await db.refresh(chat_request)
    logger.info(
        "Chat request %s created for website %s (key %s)",
        chat_request.id, data.website_id, mask_key(data.backend_api_key),
    )
    return chat_request


@router.get("/", response_model=ChatRequestList)
async def list_chat_requests(
    limit: int = Query(100, ge=1, le=1000),
    status: str | None = Query(None),
    website_id: str | None = Query(None),
    backend_api_key: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List chat requests, newest first.

    Only one filter applies: backend key, then website, then status.
    """
    if backend_api_key:
        items = await _list(db, limit, backend_api_key=backend_api_key)
    elif website_id:
        items = await _list(db, limit, website_id=website_id)
    elif status:
        items = await _list(db, limit, status=status)
    else:
        items = await _list(db, limit)
    return ChatRequestList(data=items, count=len(items))


@router.get("/stats", response_model=ChatStatsOut)
async def chat_request_stats(
    website_id: str | None = Query(None),
    backend_api_key: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    filters = {}
    if backend_api_key:
        filters["backend_api_key"] = backend_api_key
    if website_id:
        filters["website_id"] = website_id
    items = await _list(db, STATS_SCAN_LIMIT, **filters)

    counts = {s.value: 0 for s in ChatRequestStatus}
    for item in items:
        if item.status in counts:
            counts[item.status] += 1

    return ChatStatsOut(total=len(items), recent=items[:10], **counts)


@router.get("/test-connection")
async def test_connection(db: AsyncSession = Depends(get_db)):
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Chat request storage unreachable: %s", e)
        return {"success": True, "connected": False, "error": str(e)}
    return {"success": True, "connected": True, "table": ChatRequest.__tablename__}


@router.get("/website/{website_id}", response_model=ChatRequestList)
async def list_for_website(
    website_id: str,
    limit: int = Query(50, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    items = await _list(db, limit, website_id=website_id)
    return ChatRequestList(data=items, count=len(items))


@router.get("/backend/{backend_api_key}", response_model=ChatRequestList)
async def list_for_backend_key(
    backend_api_key: str,
    limit: int = Query(50, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    items = await _list(db, limit, backend_api_key=backend_api_key)
    return ChatRequestList(data=items, count=len(items))


@router.get("/{request_id}", response_model=ChatRequestOut)
async def get_chat_request(request_id: str, db: AsyncSession = Depends(get_db)):
    return await _get_or_404(db, request_id)


@router.put("/{request_id}/status", response_model=ChatRequestOut)
async def update_chat_request_status(
    request_id: str,
    data: ChatRequestStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    allowed = [s.value for s in ChatRequestStatus]
    if data.status not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid status. Must be one of: {', '.join(allowed)}",
        )
    chat_request = await _get_or_404(db, request_id)
    chat_request.status = data.status
    chat_request.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(chat_request)
    logger.info("Chat request %s → %s", request_id, data.status)
    return chat_request


@router.delete("/{request_id}", status_code=204)
async def delete_chat_request(request_id: str, db: AsyncSession = Depends(get_db)):
    chat_request = await _get_or_404(db, request_id)
    await db.delete(chat_request)
    await db.commit()
    logger.info("Chat request deleted: %s", request_id)
