from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_admin_user
from app.models.user import User
from app.models.movie import Movie
from app.models.showtime import Showtime
from app.models.booking import Booking
from app.schemas.booking import PaymentRecord, PaymentsOverview

router = APIRouter(prefix="/admin/payments", tags=["Admin - Payments"])


@router.get("/", response_model=PaymentsOverview)
def list_payments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Every booking as a (simulated) payment transaction, newest first, plus revenue."""
    rows = (
        db.query(Booking, User, Movie)
        .join(User, User.id == Booking.user_id)
        .join(Showtime, Showtime.id == Booking.showtime_id)
        .join(Movie, Movie.id == Showtime.movie_id)
        .order_by(Booking.booking_time.desc())
        .all()
    )

    transactions = [
        PaymentRecord(
            booking_id=booking.id,
            transaction_id=booking.transaction_id,
            booking_time=booking.booking_time,
            total_amount=booking.total_amount,
            card_holder=booking.card_holder,
            card_mask=booking.card_mask,
            user_name=user.full_name,
            user_email=user.email,
            movie_title=movie.title,
        )
        for booking, user, movie in rows
    ]
    total_revenue = sum((t.total_amount for t in transactions), Decimal("0"))

    return PaymentsOverview(transactions=transactions, total_revenue=total_revenue)
