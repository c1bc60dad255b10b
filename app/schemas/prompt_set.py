"""Pydantic schemas for prompt sets."""

from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field


class PromptSetCreate(BaseModel):
    website_id: str
    prompt_name: str
    summary_list: Any = None
    prompts: list = Field(default_factory=list)
    prompts_with_params: list[dict] = Field(default_factory=list)
    urls: list = Field(default_factory=list)
    backend_api_key: str = ""
    api_keys: list[str] = Field(default_factory=list)


class PromptSetUpdate(BaseModel):
    """Partial update; only fields present in the body are written."""
    summary_list: Any = None
    prompts: list | None = None
    prompts_with_params: list[dict] | None = None
    urls: list | None = None
    api_keys: list[str] | None = None


class PromptRename(BaseModel):
    new_prompt_name: str | None = None


class ApiKeyBody(BaseModel):
    api_key: str | None = None


class ApiKeysBody(BaseModel):
    api_keys: list[str] | None = None


class BackendApiKeyBody(BaseModel):
    backend_api_key: str | None = None


class PromptWithParams(BaseModel):
    """One parameterised prompt; extra keys are stored as given."""
    promptname: str

    model_config = {"extra": "allow"}


class PromptSetOut(BaseModel):
    website_id: str
    prompt_name: str
    summary_list: Any = None
    prompts: list
    prompts_with_params: list[dict]
    urls: list
    backend_api_key: str | None = None
    api_keys: list[str]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ApiKeyValidationOut(BaseModel):
    valid: bool
    data: PromptSetOut
