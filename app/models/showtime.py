import uuid
from sqlalchemy import Column, DateTime, DECIMAL, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.db.session import Base

class Showtime(Base):
    __tablename__ = "showtimes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    movie_id = Column(UUID(as_uuid=True), ForeignKey("movies.id"), nullable=False, index=True)
    screen_id = Column(UUID(as_uuid=True), ForeignKey("screens.id"), nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True) # stored in UTC
    price_classic = Column(DECIMAL(10, 2), nullable=False)
    price_prime = Column(DECIMAL(10, 2), nullable=False)
    price_recliner = Column(DECIMAL(10, 2), nullable=False)
    price_premium = Column(DECIMAL(10, 2), nullable=False)

    # Relationships
    movie = relationship("Movie", back_populates="showtimes")
    screen = relationship("Screen", back_populates="showtimes")
    bookings = relationship("Booking", back_populates="showtime")
