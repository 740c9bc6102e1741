from uuid import UUID
from typing import List
from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_user
from app.models.user import User
from app.models.movie import Movie
from app.models.cinema import Cinema, Screen
from app.models.showtime import Showtime
from app.schemas.movie import Movie as MovieSchema
from app.schemas.showtime import ShowtimeListing
from app.schemas.seat import SeatAvailability
from app.schemas.booking import (
    BookingCreate,
    BookingCreated,
    BookingCancelResponse,
    BookingSummary,
)
from app.services import booking_engine
from app.services.notifier import (
    Notifier,
    dispatch_booking_cancellation,
    dispatch_booking_confirmation,
    get_notifier,
)
from app.services.booking_history import load_booking_summaries
from app.services.seat_availability import get_seats

router = APIRouter(prefix="/events", tags=["Events"])


# ---------------------------------------------------------------------------
# GET /events/movies
# ---------------------------------------------------------------------------


@router.get("/movies", response_model=List[MovieSchema])
def list_movies(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Movie).order_by(Movie.title).all()


# ---------------------------------------------------------------------------
# GET /events/showtimes/{movie_id}: upcoming showtimes
# ---------------------------------------------------------------------------


@router.get("/showtimes/{movie_id}", response_model=List[ShowtimeListing])
def list_showtimes(
    movie_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Showtimes of a movie that have not started yet, earliest first."""
    now = datetime.now(timezone.utc)
    rows = (
        db.query(Showtime, Screen, Cinema)
        .join(Screen, Screen.id == Showtime.screen_id)
        .join(Cinema, Cinema.id == Screen.cinema_id)
        .filter(Showtime.movie_id == movie_id, Showtime.start_time > now)
        .order_by(Showtime.start_time)
        .all()
    )
    return [
        ShowtimeListing(
            showtime_id=st.id,
            start_time=st.start_time,
            screen_number=screen.screen_number,
            cinema_name=cinema.name,
            location=cinema.location,
            price_classic=st.price_classic,
            price_prime=st.price_prime,
            price_recliner=st.price_recliner,
            price_premium=st.price_premium,
        )
        for st, screen, cinema in rows
    ]


# ---------------------------------------------------------------------------
# GET /events/seats/{showtime_id}: seat availability
# ---------------------------------------------------------------------------


@router.get("/seats/{showtime_id}", response_model=List[SeatAvailability])
def get_seats_for_showtime(
    showtime_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_seats(db, showtime_id)


# ---------------------------------------------------------------------------
# POST /events/book
# ---------------------------------------------------------------------------


@router.post("/book", response_model=BookingCreated, status_code=status.HTTP_200_OK)
def book_tickets(
    data: BookingCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Book one or more seats for a showtime.

    - 400: missing showtime / seats, or seats from another screen
    - 404: unknown showtime
    - 409: a requested seat was sold first; re-fetch availability and retry
    """
    notice = booking_engine.book(db, current_user.id, data)
    background_tasks.add_task(dispatch_booking_confirmation, notifier, notice)
    return BookingCreated(message="Booking successful!", booking_id=notice.booking_id)


# ---------------------------------------------------------------------------
# GET /events/my-bookings
# ---------------------------------------------------------------------------


@router.get("/my-bookings", response_model=List[BookingSummary])
def my_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return load_booking_summaries(db, current_user.id)


# ---------------------------------------------------------------------------
# DELETE /events/bookings/{booking_id}: cancel
# ---------------------------------------------------------------------------


@router.delete("/bookings/{booking_id}", response_model=BookingCancelResponse)
def cancel_booking(
    booking_id: UUID,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
):
    """Cancel one of your bookings. 404 if it does not exist or is not yours."""
    notice = booking_engine.cancel(db, current_user.id, booking_id)
    background_tasks.add_task(dispatch_booking_cancellation, notifier, notice)
    return BookingCancelResponse(
        message="Booking cancelled successfully.", booking_id=notice.booking_id
    )
