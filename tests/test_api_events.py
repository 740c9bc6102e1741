import uuid
from decimal import Decimal

import pytest

from app.core.config import settings
from app.main import app
from app.models.booking import Booking, Ticket
from app.schemas.showtime import ShowtimeCreate
from app.services.booking_engine import SEAT_CONFLICT
from app.services.notifier import Notifier, get_notifier
from app.services.showtime_registry import add_showtime

from conftest import auth_headers, future

API = settings.API_V1_STR


class RecordingNotifier(Notifier):
    def __init__(self):
        self.confirmed = []
        self.cancelled = []

    def send_booking_confirmation(self, notice):
        self.confirmed.append(notice)

    def send_booking_cancellation(self, notice):
        self.cancelled.append(notice)


class BrokenNotifier(Notifier):
    def send_booking_confirmation(self, notice):
        raise RuntimeError("SMTP is down")

    def send_booking_cancellation(self, notice):
        raise RuntimeError("SMTP is down")


@pytest.fixture
def notifier():
    recorder = RecordingNotifier()
    app.dependency_overrides[get_notifier] = lambda: recorder
    yield recorder
    app.dependency_overrides.pop(get_notifier, None)


def _book(client, headers, showtime, seats, labels):
    return client.post(
        f"{API}/events/book",
        json={
            "showtimeId": str(showtime.id),
            "seatIds": [str(seats[label].id) for label in labels],
            "paymentDetails": {"name": "Alice", "cardNumber": "4111111111111234"},
        },
        headers=headers,
    )


def test_list_movies(client, user_headers, movie):
    response = client.get(f"{API}/events/movies", headers=user_headers)
    assert response.status_code == 200
    assert [m["title"] for m in response.json()] == ["Interstellar"]


def test_list_showtimes_only_upcoming(client, db, user_headers, movie, showtime):
    past = ShowtimeCreate(
        movie_id=movie.id,
        cinema_name="PVR Phoenix",
        location="Mumbai",
        screen_number=1,
        start_time=future(-2),
    )
    add_showtime(db, past, require_future=False)

    response = client.get(f"{API}/events/showtimes/{movie.id}", headers=user_headers)
    assert response.status_code == 200
    body = response.json()
    assert [s["showtime_id"] for s in body] == [str(showtime.id)]
    assert body[0]["cinema_name"] == "PVR Phoenix"
    assert Decimal(body[0]["price_premium"]) == Decimal("870")


def test_seat_map(client, user_headers, showtime):
    response = client.get(f"{API}/events/seats/{showtime.id}", headers=user_headers)
    assert response.status_code == 200
    seats = response.json()
    assert len(seats) == 100
    assert seats[0]["row"] == "A" and seats[0]["number"] == 1
    assert seats[0]["tier"] == "classic"
    assert Decimal(seats[0]["price"]) == Decimal("200")
    assert {s["status"] for s in seats} == {"available"}


def test_seat_map_unknown_showtime(client, user_headers):
    response = client.get(f"{API}/events/seats/{uuid.uuid4()}", headers=user_headers)
    assert response.status_code == 404


def test_book_and_list(client, db, user_headers, showtime, seats_by_label, notifier):
    response = _book(client, user_headers, showtime, seats_by_label, ["A1", "J5"])
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Booking successful!"

    booking = db.query(Booking).one()
    assert str(booking.id) == body["booking_id"]
    assert booking.total_amount == Decimal("1070")

    # Confirmation went out after the commit
    assert [n.booking_id for n in notifier.confirmed] == [booking.id]
    assert notifier.confirmed[0].seat_labels == ["A1", "J5"]

    seats = client.get(f"{API}/events/seats/{showtime.id}", headers=user_headers).json()
    booked = {f"{s['row']}{s['number']}" for s in seats if s["status"] == "booked"}
    assert booked == {"A1", "J5"}

    mine = client.get(f"{API}/events/my-bookings", headers=user_headers).json()
    assert len(mine) == 1
    assert mine[0]["seat_numbers"] == "A1, J5"
    assert mine[0]["total_tickets"] == 2
    assert mine[0]["card_mask"] == "**** **** **** 1234"
    assert mine[0]["title"] == "Interstellar"


def test_book_taken_seat_is_409(client, user, other_user, showtime, seats_by_label, notifier):
    assert _book(client, auth_headers(user), showtime, seats_by_label, ["A1"]).status_code == 200

    response = _book(client, auth_headers(other_user), showtime, seats_by_label, ["A1", "A2"])
    assert response.status_code == 409
    assert response.json()["detail"] == SEAT_CONFLICT
    assert len(notifier.confirmed) == 1


def test_book_missing_data_is_400(client, user_headers, showtime):
    response = client.post(
        f"{API}/events/book",
        json={"showtimeId": str(showtime.id), "seatIds": []},
        headers=user_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing data."


def test_book_malformed_body_is_400(client, user_headers, showtime):
    response = client.post(
        f"{API}/events/book",
        json={"showtimeId": str(showtime.id), "seatIds": ["not-a-uuid"]},
        headers=user_headers,
    )
    assert response.status_code == 400


def test_book_unknown_showtime_is_404(client, user_headers, seats_by_label):
    response = client.post(
        f"{API}/events/book",
        json={"showtimeId": str(uuid.uuid4()), "seatIds": [str(seats_by_label["A1"].id)]},
        headers=user_headers,
    )
    assert response.status_code == 404


def test_broken_notifier_does_not_fail_booking(client, db, user_headers, showtime, seats_by_label):
    app.dependency_overrides[get_notifier] = lambda: BrokenNotifier()
    try:
        response = _book(client, user_headers, showtime, seats_by_label, ["B2"])
    finally:
        app.dependency_overrides.pop(get_notifier, None)

    assert response.status_code == 200
    assert db.query(Booking).count() == 1
    assert db.query(Ticket).count() == 1


def test_cancel_booking(client, db, user_headers, showtime, seats_by_label, notifier):
    booking_id = _book(client, user_headers, showtime, seats_by_label, ["A1"]).json()["booking_id"]

    response = client.delete(f"{API}/events/bookings/{booking_id}", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Booking cancelled successfully."
    assert [str(n.booking_id) for n in notifier.cancelled] == [booking_id]

    assert db.query(Booking).count() == 0
    seats = client.get(f"{API}/events/seats/{showtime.id}", headers=user_headers).json()
    assert {s["status"] for s in seats} == {"available"}


def test_cancel_someone_elses_booking_is_404(client, user, other_user, showtime, seats_by_label, notifier):
    booking_id = _book(client, auth_headers(user), showtime, seats_by_label, ["A1"]).json()["booking_id"]

    response = client.delete(
        f"{API}/events/bookings/{booking_id}", headers=auth_headers(other_user)
    )
    assert response.status_code == 404
    assert notifier.cancelled == []


@pytest.mark.parametrize("total", ["1e30", "12345678901", "10.555", "-1"])
def test_book_total_outside_column_range_is_400(client, db, user_headers, showtime, seats_by_label, total):
    response = client.post(
        f"{API}/events/book",
        json={
            "showtimeId": str(showtime.id),
            "seatIds": [str(seats_by_label["A1"].id)],
            "totalAmount": total,
        },
        headers=user_headers,
    )
    assert response.status_code == 400
    assert db.query(Booking).count() == 0
