import uuid
from sqlalchemy import Column, String, DateTime, func, DECIMAL, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.db.session import Base

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    showtime_id = Column(UUID(as_uuid=True), ForeignKey("showtimes.id"), nullable=False, index=True)
    total_amount = Column(DECIMAL(10, 2), nullable=False)
    transaction_id = Column(String(20), unique=True, nullable=False, index=True)
    card_holder = Column(String(255), nullable=False, default="Unknown")
    card_mask = Column(String(25), nullable=False, default="CASH") # "**** **** **** 1234" or "CASH"
    booking_time = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Relationships
    user = relationship("User", back_populates="bookings")
    showtime = relationship("Showtime", back_populates="bookings")
    tickets = relationship("Ticket", back_populates="booking")

class Ticket(Base):
    __tablename__ = "tickets"
    __table_args__ = (
        # One seat, one showing, one ticket. The only guard against double booking.
        UniqueConstraint("showtime_id", "seat_id", name="uq_ticket_showtime_seat"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    booking_id = Column(UUID(as_uuid=True), ForeignKey("bookings.id"), nullable=False, index=True)
    showtime_id = Column(UUID(as_uuid=True), ForeignKey("showtimes.id"), nullable=False, index=True)
    seat_id = Column(UUID(as_uuid=True), ForeignKey("seats.id"), nullable=False)

    booking = relationship("Booking", back_populates="tickets")
    seat = relationship("Seat")
