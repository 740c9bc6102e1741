from pydantic import BaseModel, UUID4
from decimal import Decimal

from app.models.seat import SeatTier


# One entry of the seat availability view (GET /events/seats/{showtime_id})
class SeatAvailability(BaseModel):
    seat_id: UUID4
    row: str
    number: int
    tier: SeatTier
    price: Decimal
    status: str  # available, booked
