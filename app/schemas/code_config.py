"""Pydantic schemas for widget code configurations."""

from datetime import datetime
from pydantic import BaseModel


class CodeConfigCreate(BaseModel):
    api_key: str | None = None
    super_admin_url: str = ""
    super_admin_chat_url: str = ""
    integration_code: str = ""
    website_name: str = ""


class CodeConfigUpdate(BaseModel):
    super_admin_url: str | None = None
    super_admin_chat_url: str | None = None
    integration_code: str | None = None
    website_name: str | None = None


class CodeConfigOut(BaseModel):
    api_key: str
    super_admin_url: str
    super_admin_chat_url: str
    integration_code: str
    website_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
