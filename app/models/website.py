"""Website model.

One row per site running the chat widget. The api_key is what the widget
presents; knowledge_base holds the ordered [{title, value: [...]}] list the
AI endpoints answer from.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.types import JSON
import enum
import uuid
from datetime import datetime
from app.core.database import Base


class WebsiteStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


DEFAULT_CATEGORIES = ["General"]


class Website(Base):
    __tablename__ = "websites"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    website_name = Column(String, nullable=False, default="")
    website_url = Column(String, nullable=False, default="")
    system_prompt = Column(JSON, nullable=False, default=list)
    custom_prompt = Column(JSON, nullable=False, default=list)
    category = Column(JSON, nullable=False, default=lambda: list(DEFAULT_CATEGORIES))
    urls = Column(JSON, nullable=False, default=list)
    library = Column(JSON, nullable=False, default=list)
    api_key = Column(String, unique=True, index=True, nullable=False, default=lambda: str(uuid.uuid4()))
    status = Column(String, nullable=False, default=WebsiteStatus.ACTIVE.value)
    knowledge_base = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
