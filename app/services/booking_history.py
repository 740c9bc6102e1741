from typing import List
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from app.models.booking import Booking, Ticket
from app.models.cinema import Screen
from app.models.showtime import Showtime
from app.schemas.booking import BookingSummary
from app.services.booking_engine import seat_label, sorted_seats


def _serialize_booking(booking: Booking) -> BookingSummary:
    showtime = booking.showtime
    screen = showtime.screen
    seats = sorted_seats([t.seat for t in booking.tickets])
    return BookingSummary(
        booking_id=booking.id,
        booking_time=booking.booking_time,
        total_amount=booking.total_amount,
        transaction_id=booking.transaction_id,
        card_mask=booking.card_mask,
        title=showtime.movie.title,
        image_url=showtime.movie.image_url,
        duration_mins=showtime.movie.duration_mins,
        cinema_name=screen.cinema.name,
        location=screen.cinema.location,
        start_time=showtime.start_time,
        screen_number=screen.screen_number,
        seat_numbers=", ".join(seat_label(s) for s in seats),
        total_tickets=len(seats),
    )


def load_booking_summaries(db: Session, user_id: UUID) -> List[BookingSummary]:
    """A user's bookings with movie, cinema, screen and seat list, newest first."""
    bookings = (
        db.query(Booking)
        .options(
            joinedload(Booking.showtime).joinedload(Showtime.movie),
            joinedload(Booking.showtime).joinedload(Showtime.screen).joinedload(Screen.cinema),
            joinedload(Booking.tickets).joinedload(Ticket.seat),
        )
        .filter(Booking.user_id == user_id)
        .order_by(Booking.booking_time.desc())
        .all()
    )
    return [_serialize_booking(b) for b in bookings]
