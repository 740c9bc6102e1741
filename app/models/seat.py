import uuid
import enum
from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.db.session import Base

class SeatTier(str, enum.Enum):
    CLASSIC = "classic"
    PRIME = "prime"
    RECLINER = "recliner"
    PREMIUM_RECLINER = "premium_recliner"

class Seat(Base):
    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint("screen_id", "row_label", "seat_number", name="uq_seat_screen_row_number"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    screen_id = Column(UUID(as_uuid=True), ForeignKey("screens.id"), nullable=False, index=True)
    row_label = Column(String(5), nullable=False)
    seat_number = Column(Integer, nullable=False)
    tier = Column(SAEnum(SeatTier, native_enum=False, values_callable=lambda e: [m.value for m in e]), nullable=False)

    screen = relationship("Screen", back_populates="seats")
