"""Prompt set model.

Named prompt collections per website, keyed by (website_id, prompt_name).
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.types import JSON
from datetime import datetime
from app.core.database import Base


class PromptSet(Base):
    __tablename__ = "prompt_sets"

    website_id = Column(String, primary_key=True)
    prompt_name = Column(String, primary_key=True)
    summary_list = Column(JSON, nullable=True)
    prompts = Column(JSON, nullable=False, default=list)
    prompts_with_params = Column(JSON, nullable=False, default=list)  # [{"promptname": ..., ...}]
    urls = Column(JSON, nullable=False, default=list)
    backend_api_key = Column(String, nullable=True, index=True)
    api_keys = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
