import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.session import transaction
from app.models.cinema import Cinema, Screen
from app.models.movie import Movie
from app.models.showtime import Showtime
from app.schemas.showtime import ShowtimeCreate
from app.services.seat_layout import LAYOUT_CAPACITY, generate_layout

logger = logging.getLogger(__name__)


def to_utc(value: datetime) -> datetime:
    """Normalise a start time to UTC; naive values use the configured local offset."""
    if value.tzinfo is None:
        local = timezone(timedelta(minutes=settings.SHOWTIME_UTC_OFFSET_MINUTES))
        value = value.replace(tzinfo=local)
    return value.astimezone(timezone.utc)


def _get_or_create_cinema(db: Session, name: str, location: str) -> Cinema:
    cinema = (
        db.query(Cinema)
        .filter(Cinema.name == name, Cinema.location == location)
        .first()
    )
    if cinema:
        return cinema

    cinema = Cinema(name=name, location=location)
    db.add(cinema)
    db.flush()
    logger.info("Created cinema %s (%s, %s).", cinema.id, name, location)
    return cinema


def _get_or_create_screen(db: Session, cinema: Cinema, screen_number: int) -> Tuple[Screen, bool]:
    """Return (screen, created). A new screen gets its seat layout immediately."""
    screen = (
        db.query(Screen)
        .filter(Screen.cinema_id == cinema.id, Screen.screen_number == screen_number)
        .first()
    )
    if screen:
        return screen, False

    screen = Screen(cinema_id=cinema.id, screen_number=screen_number, capacity=LAYOUT_CAPACITY)
    db.add(screen)
    db.flush()

    seats = generate_layout(db, screen.id)
    logger.info("Created screen %s (#%d) with %d seats.", screen.id, screen_number, seats)
    return screen, True


def _price(value: Optional[Decimal], default: int) -> Decimal:
    return Decimal(value) if value is not None else Decimal(default)


def _insert_showtime(db: Session, data: ShowtimeCreate, start_time: datetime) -> Showtime:
    movie = db.query(Movie).filter(Movie.id == data.movie_id).first()
    if not movie:
        raise NotFoundError("Movie not found")

    cinema = _get_or_create_cinema(db, data.cinema_name, data.location)
    screen, _ = _get_or_create_screen(db, cinema, data.screen_number)

    showtime = Showtime(
        movie_id=movie.id,
        screen_id=screen.id,
        start_time=start_time,
        price_classic=_price(data.price_classic, settings.DEFAULT_PRICE_CLASSIC),
        price_prime=_price(data.price_prime, settings.DEFAULT_PRICE_PRIME),
        price_recliner=_price(data.price_recliner, settings.DEFAULT_PRICE_RECLINER),
        price_premium=_price(data.price_premium, settings.DEFAULT_PRICE_PREMIUM),
    )
    db.add(showtime)
    db.flush()
    return showtime


def add_showtime(
    db: Session,
    data: ShowtimeCreate,
    require_future: Optional[bool] = None,
) -> Showtime:
    """
    Resolve-or-create the cinema and screen, then insert the showtime.

    Cinema, screen, seat layout and showtime are written in one transaction:
    a failure at any step leaves none of them behind.

    Two admins adding the first showtime for the same new cinema or screen
    race on the unique constraints. The loser's transaction is rolled back
    and the whole operation re-run, which then finds the winner's rows.
    After ``SHOWTIME_CONFLICT_RETRIES`` attempts the ConflictError propagates.
    """
    if require_future is None:
        require_future = settings.SHOWTIME_REQUIRE_FUTURE

    start_time = to_utc(data.start_time)
    if require_future and start_time <= datetime.now(timezone.utc):
        raise ValidationError("Showtime must start in the future")

    attempts = max(1, settings.SHOWTIME_CONFLICT_RETRIES)
    for attempt in range(1, attempts + 1):
        try:
            with transaction(db, conflict_detail="Cinema or screen was created concurrently"):
                showtime = _insert_showtime(db, data, start_time)
                showtime_id = showtime.id
            break
        except ConflictError:
            if attempt == attempts:
                raise
            logger.warning(
                "Showtime add conflicted (attempt %d/%d), retrying.", attempt, attempts
            )

    logger.info("Added showtime %s for movie %s.", showtime_id, data.movie_id)
    return db.query(Showtime).filter(Showtime.id == showtime_id).one()
