"""
Booking transaction engine.

Turns a seat selection into one Booking plus one Ticket per seat, and turns
a booking back into free seats on cancellation. Both run as a single
transaction on the session passed in; nothing here holds a connection of its
own.

Exclusivity rests on the unique (showtime_id, seat_id) constraint of the
tickets table. Two racing bookings for the same seat both pass every
application-level check; the second ticket insert fails, the loser's whole
transaction (booking row included) is rolled back and surfaces as a
ConflictError. There is no seat hold: a seat is free until its ticket commits.
"""
import logging
import random
import string
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.db.session import transaction
from app.models.booking import Booking, Ticket
from app.models.notification import Notification
from app.models.seat import Seat
from app.models.showtime import Showtime
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingNotice, PaymentDetails
from app.services.seat_layout import tier_for_row, tier_price

logger = logging.getLogger(__name__)

SEAT_CONFLICT = "One or more seats are already booked for this showtime."


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _generate_transaction_id(db: Session) -> str:
    """Generate a unique 'TXN-XXXXXXXXXXXX' payment reference."""
    chars = string.ascii_uppercase + string.digits
    while True:
        reference = "TXN-" + "".join(random.choices(chars, k=12))
        if not db.query(Booking.id).filter(Booking.transaction_id == reference).first():
            return reference


def mask_payment(payment: Optional[PaymentDetails]):
    """Return (card_holder, card_mask). No payment details means cash."""
    if payment is None:
        return "Unknown", "CASH"
    return payment.name, f"**** **** **** {payment.card_number[-4:]}"


def seat_label(seat: Seat) -> str:
    return f"{seat.row_label}{seat.seat_number}"


def quote_total(showtime: Showtime, seats: List[Seat]) -> Decimal:
    """Sum of tier prices, using the same row partition as the layout."""
    return sum(
        (tier_price(showtime, tier_for_row(seat.row_label)) for seat in seats),
        Decimal("0"),
    )


def sorted_seats(seats: List[Seat]) -> List[Seat]:
    """Row, then seat number. The one ordering used for labels and listings."""
    return sorted(seats, key=lambda s: (s.row_label, s.seat_number))


# ---------------------------------------------------------------------------
# Book
# ---------------------------------------------------------------------------


def book(db: Session, user_id: UUID, data: BookingCreate) -> BookingNotice:
    """
    Atomically book ``data.seat_ids`` for ``data.showtime_id``.

    Raises ValidationError (missing showtime/seats, seats from another
    screen, total mismatch when verification is on), NotFoundError (unknown
    showtime or user), ConflictError (seat already sold) or TransactionError.
    On any of them zero Booking and zero Ticket rows persist.
    """
    if not data.showtime_id or not data.seat_ids:
        raise ValidationError("Missing data.")

    # Same seat twice in one request is one ticket, not a self-conflict.
    seat_ids = list(dict.fromkeys(data.seat_ids))

    with transaction(db, conflict_detail=SEAT_CONFLICT):
        showtime = (
            db.query(Showtime)
            .options(joinedload(Showtime.movie))
            .filter(Showtime.id == data.showtime_id)
            .first()
        )
        if not showtime:
            raise NotFoundError("Showtime not found.")

        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found.")

        seats = sorted_seats(
            db.query(Seat)
            .filter(Seat.id.in_(seat_ids), Seat.screen_id == showtime.screen_id)
            .all()
        )
        if len(seats) != len(seat_ids):
            raise ValidationError("One or more seats do not belong to this showtime's screen.")

        quoted = quote_total(showtime, seats)
        total = data.total_amount if data.total_amount is not None else quoted
        if settings.VERIFY_BOOKING_TOTAL and Decimal(total) != quoted:
            raise ValidationError(f"Total amount {total} does not match seat prices ({quoted}).")

        card_holder, card_mask = mask_payment(data.payment_details)
        booking = Booking(
            user_id=user.id,
            showtime_id=showtime.id,
            total_amount=total,
            transaction_id=_generate_transaction_id(db),
            card_holder=card_holder,
            card_mask=card_mask,
        )
        db.add(booking)
        db.flush()  # get booking.id

        for seat in seats:
            db.add(Ticket(booking_id=booking.id, showtime_id=showtime.id, seat_id=seat.id))
        db.flush()

        title = showtime.movie.title if showtime.movie else "Unknown movie"
        db.add(Notification(
            message=f"New booking: {title} ({len(seats)} tickets) by {user.full_name}",
            type="booking",
            reference_id=booking.id,
        ))

        notice = BookingNotice(
            booking_id=booking.id,
            transaction_id=booking.transaction_id,
            movie_title=title,
            start_time=showtime.start_time,
            seat_labels=[seat_label(s) for s in seats],
            total_amount=Decimal(total),
            user_name=user.full_name,
            user_email=user.email,
            user_mobile=user.mobile_number,
        )

    logger.info(
        "Booking %s committed: showtime=%s seats=%s user=%s",
        notice.booking_id, data.showtime_id, ",".join(notice.seat_labels), user_id,
    )
    return notice


# ---------------------------------------------------------------------------
# Cancel
# ---------------------------------------------------------------------------


def purge_bookings(db: Session, booking_filter) -> Tuple[int, int]:
    """
    Delete tickets then bookings matching ``booking_filter`` (a criterion on
    Booking). Children first. Must run inside the caller's transaction.

    Returns (tickets_deleted, bookings_deleted).
    """
    booking_ids = db.query(Booking.id).filter(booking_filter).scalar_subquery()
    tickets = (
        db.query(Ticket)
        .filter(Ticket.booking_id.in_(booking_ids))
        .delete(synchronize_session="fetch")
    )
    bookings = (
        db.query(Booking)
        .filter(booking_filter)
        .delete(synchronize_session="fetch")
    )
    return tickets, bookings


def cancel(db: Session, user_id: UUID, booking_id: UUID) -> BookingNotice:
    """
    Cancel one of the caller's bookings: its tickets and the booking row go
    in one transaction, with an admin notification alongside.

    A booking that does not exist and a booking owned by someone else are
    indistinguishable to the caller: both raise NotFoundError and change
    nothing.
    """
    with transaction(db):
        booking = (
            db.query(Booking)
            .options(
                joinedload(Booking.user),
                joinedload(Booking.showtime).joinedload(Showtime.movie),
                joinedload(Booking.tickets).joinedload(Ticket.seat),
            )
            .filter(Booking.id == booking_id, Booking.user_id == user_id)
            .first()
        )
        if not booking:
            raise NotFoundError("Booking not found or access denied.")

        seats = sorted_seats([t.seat for t in booking.tickets])
        title = booking.showtime.movie.title if booking.showtime.movie else "Unknown movie"
        notice = BookingNotice(
            booking_id=booking.id,
            transaction_id=booking.transaction_id,
            movie_title=title,
            start_time=booking.showtime.start_time,
            seat_labels=[seat_label(s) for s in seats],
            total_amount=booking.total_amount,
            user_name=booking.user.full_name,
            user_email=booking.user.email,
            user_mobile=booking.user.mobile_number,
        )

        purge_bookings(db, Booking.id == booking.id)

        db.add(Notification(
            message=(
                f'Booking cancelled: {notice.user_name} cancelled booking for "{title}" '
                f"(ID: {notice.booking_id}, {notice.ticket_count} tickets, "
                f"₹{notice.total_amount})"
            ),
            type="booking",
            reference_id=notice.booking_id,
        ))

    logger.info("Booking %s cancelled by user %s.", booking_id, user_id)
    return notice
