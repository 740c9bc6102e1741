from typing import List
from uuid import UUID

from sqlalchemy import and_
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.booking import Ticket
from app.models.seat import Seat
from app.models.showtime import Showtime
from app.schemas.seat import SeatAvailability
from app.services.seat_layout import tier_price

AVAILABLE = "available"
BOOKED = "booked"


def get_seats(db: Session, showtime_id: UUID) -> List[SeatAvailability]:
    """
    Per-seat status for one showtime.

    Seats come from the showtime's screen; a seat is booked iff a ticket
    exists for (this showtime, that seat). Tickets of other showtimes on the
    same screen do not count. Ordered by row, then seat number.
    """
    showtime = db.query(Showtime).filter(Showtime.id == showtime_id).first()
    if not showtime:
        raise NotFoundError("Showtime not found.")

    rows = (
        db.query(Seat, Ticket.id)
        .outerjoin(
            Ticket,
            and_(Ticket.seat_id == Seat.id, Ticket.showtime_id == showtime.id),
        )
        .filter(Seat.screen_id == showtime.screen_id)
        .order_by(Seat.row_label, Seat.seat_number)
        .all()
    )

    return [
        SeatAvailability(
            seat_id=seat.id,
            row=seat.row_label,
            number=seat.seat_number,
            tier=seat.tier,
            price=tier_price(showtime, seat.tier),
            status=BOOKED if ticket_id is not None else AVAILABLE,
        )
        for seat, ticket_id in rows
    ]
