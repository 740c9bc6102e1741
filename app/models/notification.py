import uuid
from sqlalchemy import Column, String, Boolean, DateTime, func, Text
from sqlalchemy.dialects.postgresql import UUID
from app.db.session import Base

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False) # booking, user
    is_read = Column(Boolean, default=False)
    reference_id = Column(UUID(as_uuid=True), nullable=True) # Booking ID, User ID
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
