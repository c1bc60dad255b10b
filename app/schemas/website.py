"""Pydantic schemas for websites."""

from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field, field_validator
from app.models.website import WebsiteStatus, DEFAULT_CATEGORIES


def _list_or(default: list):
    def check(value: Any) -> list:
        return list(value) if isinstance(value, list) else list(default)
    return check


class WebsiteBase(BaseModel):
    """Editable website fields.

    List fields that arrive as anything other than a list fall back to
    their defaults rather than failing the request.
    """
    website_name: str = ""
    website_url: str = ""
    system_prompt: list = Field(default_factory=list)
    custom_prompt: list = Field(default_factory=list)
    category: list = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    urls: list = Field(default_factory=list)
    library: list = Field(default_factory=list)
    status: WebsiteStatus = WebsiteStatus.ACTIVE

    @field_validator("system_prompt", "custom_prompt", "urls", "library", mode="before")
    @classmethod
    def _plain_list(cls, value: Any) -> list:
        return _list_or([])(value)

    @field_validator("category", mode="before")
    @classmethod
    def _category_list(cls, value: Any) -> list:
        return _list_or(DEFAULT_CATEGORIES)(value)

    @field_validator("website_name", "website_url", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any):
        return value or WebsiteStatus.ACTIVE


class WebsiteCreate(WebsiteBase):
    id: str | None = None
    api_key: str | None = None

    @field_validator("id", "api_key", mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Any):
        # blank keys get generated on insert
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return str(value)


class WebsiteUpdate(WebsiteBase):
    """Full replace of the editable fields (PUT)."""


class WebsiteCustomDataUpdate(BaseModel):
    custom_prompt: list = Field(default_factory=list)
    urls: list = Field(default_factory=list)
    library: list = Field(default_factory=list)

    @field_validator("custom_prompt", "urls", "library", mode="before")
    @classmethod
    def _plain_list(cls, value: Any) -> list:
        return _list_or([])(value)


class WebsiteStatusUpdate(BaseModel):
    status: str | None = None


class WebsiteSyncRequest(BaseModel):
    api_base_url: str | None = None
    backend_api_key: str | None = None


class WebsiteOut(BaseModel):
    id: str
    website_name: str
    website_url: str
    system_prompt: list
    custom_prompt: list
    category: list
    urls: list
    library: list
    api_key: str
    status: str
    knowledge_base: list
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class WebsiteSyncOut(BaseModel):
    message: str
    synced: int
    items: list[WebsiteOut]
