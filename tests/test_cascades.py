import uuid

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import NotFoundError, TransactionError
from app.models.booking import Booking, Ticket
from app.models.movie import Movie
from app.models.seat import Seat
from app.models.showtime import Showtime
from app.models.user import User
from app.schemas.booking import BookingCreate
from app.services import booking_engine, cascades

from conftest import future, new_showtime


def _book(db, user, showtime, labels):
    seats = {
        f"{s.row_label}{s.seat_number}": s
        for s in db.query(Seat).filter(Seat.screen_id == showtime.screen_id)
    }
    return booking_engine.book(db, user.id, BookingCreate(
        showtime_id=showtime.id, seat_ids=[seats[label].id for label in labels],
    ))


def test_delete_booking(db, user, showtime):
    notice = _book(db, user, showtime, ["A1", "A2"])
    _book(db, user, showtime, ["B1"])

    result = cascades.delete_booking(db, notice.booking_id)

    assert (result.tickets, result.bookings, result.showtimes) == (2, 1, 0)
    assert db.query(Booking).count() == 1
    assert db.query(Ticket).count() == 1


def test_delete_showtime(db, user, other_user, movie, showtime):
    later = new_showtime(db, movie, start_time=future(96))
    _book(db, user, showtime, ["A1", "A2"])
    _book(db, other_user, showtime, ["J1"])
    _book(db, user, later, ["A1"])

    result = cascades.delete_showtime(db, showtime.id)

    assert (result.tickets, result.bookings, result.showtimes) == (3, 2, 1)
    assert db.query(Showtime).count() == 1
    assert db.query(Booking).one().showtime_id == later.id
    # Seats belong to the screen and survive
    assert db.query(Seat).count() == 100


def test_delete_movie(db, user, movie, showtime):
    second = new_showtime(db, movie, screen_number=2)
    other_movie = Movie(title="Dune")
    db.add(other_movie)
    db.commit()
    kept = new_showtime(db, other_movie, start_time=future(12))

    _book(db, user, showtime, ["A1"])
    _book(db, user, second, ["B1", "B2"])
    _book(db, user, kept, ["C1"])

    result = cascades.delete_movie(db, movie.id)

    assert (result.tickets, result.bookings, result.showtimes) == (3, 2, 2)
    assert db.query(Movie).one().title == "Dune"
    assert db.query(Showtime).one().id == kept.id
    assert db.query(Booking).count() == 1
    assert db.query(Ticket).count() == 1


def test_delete_movie_without_showtimes(db, movie):
    result = cascades.delete_movie(db, movie.id)
    assert result.showtimes == 0
    assert db.query(Movie).count() == 0


def test_delete_user(db, user, other_user, showtime):
    _book(db, user, showtime, ["A1", "A2"])
    _book(db, user, showtime, ["A3"])
    _book(db, other_user, showtime, ["J1"])

    result = cascades.delete_user(db, user.id)

    assert (result.tickets, result.bookings) == (3, 2)
    assert db.query(User).filter(User.email == "alice@example.com").count() == 0
    assert db.query(Booking).count() == 1
    assert db.query(Ticket).count() == 1


@pytest.mark.parametrize("delete", [
    cascades.delete_booking,
    cascades.delete_showtime,
    cascades.delete_movie,
    cascades.delete_user,
])
def test_missing_target(db, delete):
    with pytest.raises(NotFoundError):
        delete(db, uuid.uuid4())


def test_failed_last_step_restores_everything(db, user, movie, showtime, monkeypatch):
    _book(db, user, showtime, ["A1", "A2"])
    real_query = db.query

    def failing_query(*entities, **kwargs):
        # Only the final statement, DELETE FROM movies, targets the Movie entity itself
        if entities == (Movie,):
            raise OperationalError("DELETE FROM movies", {}, Exception("disk I/O error"))
        return real_query(*entities, **kwargs)

    monkeypatch.setattr(db, "query", failing_query)

    with pytest.raises(TransactionError):
        cascades.delete_movie(db, movie.id)

    monkeypatch.undo()
    assert db.query(Movie).count() == 1
    assert db.query(Showtime).count() == 1
    assert db.query(Booking).count() == 1
    assert db.query(Ticket).count() == 2
