"""
Administrative cascade deletes.

Every path removes tickets before bookings, bookings before showtimes and
showtimes before the movie, inside one transaction. A failure at any step
rolls the whole cascade back, so no orphaned ticket or ticketless booking is
ever left behind.
"""
import logging
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.db.session import transaction
from app.models.booking import Booking
from app.models.movie import Movie
from app.models.showtime import Showtime
from app.models.user import User
from app.schemas.common import CascadeResult
from app.services.booking_engine import purge_bookings

logger = logging.getLogger(__name__)


def _require(db: Session, model, row_id: UUID, label: str) -> None:
    if not db.query(model.id).filter(model.id == row_id).first():
        raise NotFoundError(f"{label} not found")


def delete_booking(db: Session, booking_id: UUID) -> CascadeResult:
    """Tickets of the booking, then the booking."""
    with transaction(db):
        _require(db, Booking, booking_id, "Booking")
        tickets, bookings = purge_bookings(db, Booking.id == booking_id)

    logger.info("Deleted booking %s (%d tickets).", booking_id, tickets)
    return CascadeResult(tickets=tickets, bookings=bookings)


def delete_showtime(db: Session, showtime_id: UUID) -> CascadeResult:
    """Tickets, then bookings of the showtime, then the showtime."""
    with transaction(db):
        _require(db, Showtime, showtime_id, "Showtime")
        tickets, bookings = purge_bookings(db, Booking.showtime_id == showtime_id)
        showtimes = (
            db.query(Showtime)
            .filter(Showtime.id == showtime_id)
            .delete(synchronize_session="fetch")
        )

    logger.info(
        "Deleted showtime %s (%d bookings, %d tickets).", showtime_id, bookings, tickets
    )
    return CascadeResult(tickets=tickets, bookings=bookings, showtimes=showtimes)


def delete_movie(db: Session, movie_id: UUID) -> CascadeResult:
    """Tickets and bookings of every showtime of the movie, the showtimes, the movie."""
    with transaction(db):
        _require(db, Movie, movie_id, "Movie")
        showtime_ids = (
            db.query(Showtime.id)
            .filter(Showtime.movie_id == movie_id)
            .scalar_subquery()
        )
        tickets, bookings = purge_bookings(db, Booking.showtime_id.in_(showtime_ids))
        showtimes = (
            db.query(Showtime)
            .filter(Showtime.movie_id == movie_id)
            .delete(synchronize_session="fetch")
        )
        db.query(Movie).filter(Movie.id == movie_id).delete(synchronize_session="fetch")

    logger.info(
        "Deleted movie %s (%d showtimes, %d bookings, %d tickets).",
        movie_id, showtimes, bookings, tickets,
    )
    return CascadeResult(tickets=tickets, bookings=bookings, showtimes=showtimes)


def delete_user(db: Session, user_id: UUID) -> CascadeResult:
    """Tickets of the user's bookings, the bookings, then the user."""
    with transaction(db):
        _require(db, User, user_id, "User")
        tickets, bookings = purge_bookings(db, Booking.user_id == user_id)
        db.query(User).filter(User.id == user_id).delete(synchronize_session="fetch")

    logger.info("Deleted user %s (%d bookings, %d tickets).", user_id, bookings, tickets)
    return CascadeResult(tickets=tickets, bookings=bookings)
