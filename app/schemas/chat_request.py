"""Pydantic schemas for chat requests."""

from datetime import datetime
from typing import Any
from pydantic import BaseModel
from app.models.chat_request import ChatRequestStatus


class ChatRequestCreate(BaseModel):
    website_id: str | None = None
    collected_data: Any = None
    backend_api_key: str | None = None
    status: ChatRequestStatus = ChatRequestStatus.PENDING


class ChatRequestStatusUpdate(BaseModel):
    status: str | None = None


class ChatRequestOut(BaseModel):
    id: str
    website_id: str
    backend_api_key: str
    collected_data: Any
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ChatRequestList(BaseModel):
    data: list[ChatRequestOut]
    count: int


class ChatStatsOut(BaseModel):
    total: int
    pending: int
    confirmed: int
    cancelled: int
    completed: int
    recent: list[ChatRequestOut]
