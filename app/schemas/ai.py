"""Pydantic schemas for the chat widget AI endpoints."""

from typing import Any, Literal
from pydantic import AliasChoices, BaseModel, Field, field_validator

Tone = Literal["friendly", "professional", "enthusiastic", "direct"]
EmojiLevel = Literal["minimal", "moderate", "high"]
DetailLevel = Literal["brief", "balanced", "detailed"]

_ALLOWED = {
    "tone": ("friendly", "professional", "enthusiastic", "direct"),
    "emoji_level": ("minimal", "moderate", "high"),
    "detail_level": ("brief", "balanced", "detailed"),
}


class PersonalityConfig(BaseModel):
    """Formatting preferences for a generated answer.

    Unknown or malformed values are replaced with the field default instead
    of failing validation, so a sloppy widget config never breaks a reply.
    The widget script sends camelCase keys; both spellings are accepted.
    """
    tone: Tone = "friendly"
    emoji_level: EmojiLevel = Field("moderate", validation_alias=AliasChoices("emoji_level", "emojiLevel"))
    detail_level: DetailLevel = Field("balanced", validation_alias=AliasChoices("detail_level", "detailLevel"))
    use_markdown: bool = Field(True, validation_alias=AliasChoices("use_markdown", "useMarkdown"))
    be_enthusiastic: bool = Field(True, validation_alias=AliasChoices("be_enthusiastic", "beEnthusiastic"))

    model_config = {"frozen": True}

    @field_validator("tone", "emoji_level", "detail_level", mode="before")
    @classmethod
    def _known_option(cls, value: Any, info):
        if isinstance(value, str) and value.strip().lower() in _ALLOWED[info.field_name]:
            return value.strip().lower()
        return cls.model_fields[info.field_name].default

    @field_validator("use_markdown", "be_enthusiastic", mode="before")
    @classmethod
    def _flag(cls, value: Any, info):
        if isinstance(value, bool):
            return value
        return cls.model_fields[info.field_name].default


class AIQuestion(BaseModel):
    question: str | None = None
    api_key: str | None = None
    personality: PersonalityConfig | None = None


class ApiKeyCheck(BaseModel):
    api_key: str | None = None


class AIResponseOut(BaseModel):
    success: bool = True
    response: str


class DirectResponseOut(BaseModel):
    success: bool = True
    response: str
    has_match: bool
    match_type: str | None = None
    matched_data: dict | None = None
    available_titles: list[str] = Field(default_factory=list)
    available_categories: list[str] = Field(default_factory=list)
