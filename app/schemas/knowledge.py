"""Pydantic schemas for a website's knowledge base."""

from typing import Any
from pydantic import BaseModel


class KnowledgeItemOut(BaseModel):
    title: str
    value: list[str]


class KnowledgeBaseOut(BaseModel):
    website_id: str
    knowledge_base: list[KnowledgeItemOut]


class KnowledgeBasePayload(BaseModel):
    """Raw knowledge payload in any shape the widget admin sends."""
    knowledge_base: Any = None


class KnowledgeItemUpdate(BaseModel):
    title: str | None = None
    value: Any = None


class KnowledgeTitlesOut(BaseModel):
    website_id: str
    titles: list[str]
