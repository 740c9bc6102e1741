from decimal import Decimal
from typing import Dict, List
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.seat import Seat, SeatTier
from app.models.showtime import Showtime

SEATS_PER_ROW = 10

# Single source of truth for the row partition. Layout generation and
# pricing both read from here.
TIER_ROWS: Dict[SeatTier, List[str]] = {
    SeatTier.CLASSIC: ["A", "B"],
    SeatTier.PRIME: ["C", "D", "E", "F"],
    SeatTier.RECLINER: ["G", "H", "I"],
    SeatTier.PREMIUM_RECLINER: ["J"],
}

ROW_TIERS: Dict[str, SeatTier] = {
    row: tier for tier, rows in TIER_ROWS.items() for row in rows
}

ROWS: List[str] = sorted(ROW_TIERS)

LAYOUT_CAPACITY = len(ROWS) * SEATS_PER_ROW

_PRICE_COLUMNS = {
    SeatTier.CLASSIC: "price_classic",
    SeatTier.PRIME: "price_prime",
    SeatTier.RECLINER: "price_recliner",
    SeatTier.PREMIUM_RECLINER: "price_premium",
}


def tier_for_row(row_label: str) -> SeatTier:
    """Return the price tier a row belongs to. Raises KeyError for unknown rows."""
    return ROW_TIERS[row_label.upper()]


def tier_price(showtime: Showtime, tier: SeatTier) -> Decimal:
    """Price of one seat of ``tier`` for ``showtime``."""
    return Decimal(getattr(showtime, _PRICE_COLUMNS[tier]))


def generate_layout(db: Session, screen_id: UUID) -> int:
    """
    Populate the fixed A-J x 1-10 seat grid for a screen.

    Idempotent: seats already present for (screen, row, number) are left
    alone, so running it twice still leaves exactly 100 rows.

    Runs inside the caller's transaction and never commits; a failure
    partway rolls back together with the screen that triggered it.

    Returns the number of seats inserted.
    """
    existing = {
        (row, number)
        for row, number in db.query(Seat.row_label, Seat.seat_number)
        .filter(Seat.screen_id == screen_id)
        .all()
    }

    created = 0
    for row in ROWS:
        tier = ROW_TIERS[row]
        for number in range(1, SEATS_PER_ROW + 1):
            if (row, number) in existing:
                continue
            db.add(Seat(screen_id=screen_id, row_label=row, seat_number=number, tier=tier))
            created += 1

    db.flush()
    return created
