from decimal import Decimal

import pytest

from app.models.cinema import Cinema, Screen
from app.models.seat import Seat, SeatTier
from app.services.seat_layout import (
    LAYOUT_CAPACITY,
    ROWS,
    generate_layout,
    tier_for_row,
    tier_price,
)


@pytest.fixture
def screen(db):
    cinema = Cinema(name="INOX", location="Delhi")
    db.add(cinema)
    db.flush()
    screen = Screen(cinema_id=cinema.id, screen_number=1)
    db.add(screen)
    db.commit()
    return screen


def test_tier_partition():
    assert ROWS == list("ABCDEFGHIJ")
    assert tier_for_row("A") == SeatTier.CLASSIC
    assert tier_for_row("B") == SeatTier.CLASSIC
    assert tier_for_row("C") == SeatTier.PRIME
    assert tier_for_row("F") == SeatTier.PRIME
    assert tier_for_row("G") == SeatTier.RECLINER
    assert tier_for_row("I") == SeatTier.RECLINER
    assert tier_for_row("J") == SeatTier.PREMIUM_RECLINER
    with pytest.raises(KeyError):
        tier_for_row("K")


def test_generate_layout_creates_full_grid(db, screen):
    assert generate_layout(db, screen.id) == LAYOUT_CAPACITY == 100
    db.commit()

    seats = db.query(Seat).filter(Seat.screen_id == screen.id).all()
    assert len(seats) == 100
    assert {(s.row_label, s.seat_number) for s in seats} == {
        (row, n) for row in ROWS for n in range(1, 11)
    }
    for seat in seats:
        assert seat.tier == tier_for_row(seat.row_label)


def test_generate_layout_is_idempotent(db, screen):
    generate_layout(db, screen.id)
    db.commit()

    assert generate_layout(db, screen.id) == 0
    db.commit()
    assert db.query(Seat).filter(Seat.screen_id == screen.id).count() == 100


def test_generate_layout_fills_gaps(db, screen):
    db.add(Seat(screen_id=screen.id, row_label="A", seat_number=1, tier=SeatTier.CLASSIC))
    db.commit()

    assert generate_layout(db, screen.id) == 99
    db.commit()
    assert db.query(Seat).filter(Seat.screen_id == screen.id).count() == 100


def test_tier_price_reads_showtime_columns(showtime):
    assert tier_price(showtime, SeatTier.CLASSIC) == Decimal("200")
    assert tier_price(showtime, SeatTier.PRIME) == Decimal("350")
    assert tier_price(showtime, SeatTier.RECLINER) == Decimal("550")
    assert tier_price(showtime, SeatTier.PREMIUM_RECLINER) == Decimal("870")
