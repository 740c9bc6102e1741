import uuid
from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.db.session import Base

class Cinema(Base):
    __tablename__ = "cinemas"
    __table_args__ = (
        UniqueConstraint("name", "location", name="uq_cinema_name_location"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)

    # Relationships
    screens = relationship("Screen", back_populates="cinema")

class Screen(Base):
    __tablename__ = "screens"
    __table_args__ = (
        UniqueConstraint("cinema_id", "screen_number", name="uq_screen_cinema_number"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    cinema_id = Column(UUID(as_uuid=True), ForeignKey("cinemas.id"), nullable=False, index=True)
    screen_number = Column(Integer, nullable=False)
    capacity = Column(Integer, nullable=False, default=100)

    # Relationships
    cinema = relationship("Cinema", back_populates="screens")
    seats = relationship("Seat", back_populates="screen")
    showtimes = relationship("Showtime", back_populates="screen")
