"""Chat request model.

A chat request is the contact/booking data a visitor leaves through the
widget, queued for the site owner to confirm.
"""
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from sqlalchemy.types import JSON
from app.core.database import Base


class ChatRequestStatus(str, enum.Enum):
    """Chat request lifecycle."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ChatRequest(Base):
    __tablename__ = "chat_requests"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    website_id = Column(String, nullable=False, index=True)
    backend_api_key = Column(String, nullable=False, index=True)
    collected_data = Column(JSON, nullable=False)
    status = Column(String, nullable=False, default=ChatRequestStatus.PENDING.value, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
