"""Widget embed configuration, one row per website API key."""

from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime
from app.core.database import Base


class CodeConfig(Base):
    __tablename__ = "code_configs"

    api_key = Column(String, primary_key=True)
    super_admin_url = Column(String, nullable=False, default="")
    super_admin_chat_url = Column(String, nullable=False, default="")
    integration_code = Column(Text, nullable=False, default="")
    website_name = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
