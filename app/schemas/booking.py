from typing import Optional, List
from pydantic import AliasChoices, BaseModel, Field, UUID4, field_validator
from decimal import Decimal
from datetime import datetime


# Simulated payment: only the holder name and the last four digits are kept
class PaymentDetails(BaseModel):
    name: str = Field(min_length=1)
    card_number: str = Field(validation_alias=AliasChoices("card_number", "cardNumber"))

    @field_validator("card_number")
    @classmethod
    def strip_card_number(cls, v):
        digits = "".join(ch for ch in v if ch.isdigit())
        if len(digits) < 4:
            raise ValueError("card number must contain at least 4 digits")
        return digits


# Booking: Create (POST /events/book)
# Accepts the browser client's camelCase keys as well as snake_case.
class BookingCreate(BaseModel):
    showtime_id: Optional[UUID4] = Field(
        None, validation_alias=AliasChoices("showtime_id", "showtimeId")
    )
    seat_ids: List[UUID4] = Field(
        default_factory=list, validation_alias=AliasChoices("seat_ids", "seatIds")
    )
    total_amount: Optional[Decimal] = Field(
        None, ge=0, max_digits=10, decimal_places=2,
        validation_alias=AliasChoices("total_amount", "totalAmount")
    )
    payment_details: Optional[PaymentDetails] = Field(
        None, validation_alias=AliasChoices("payment_details", "paymentDetails")
    )

    @field_validator("showtime_id", mode="before")
    @classmethod
    def parse_empty_str_to_none(cls, v):
        if v == "":
            return None
        return v


class BookingCreated(BaseModel):
    message: str
    booking_id: UUID4


class BookingCancelResponse(BaseModel):
    message: str
    booking_id: UUID4


# Facts about a committed booking or cancellation, handed to the notifier
class BookingNotice(BaseModel):
    booking_id: UUID4
    transaction_id: str
    movie_title: str
    start_time: datetime
    seat_labels: List[str]
    total_amount: Decimal
    user_name: str
    user_email: str
    user_mobile: Optional[str] = None

    @property
    def ticket_count(self) -> int:
        return len(self.seat_labels)


# Booking: aggregated row (GET /events/my-bookings, GET /admin/users/{id})
class BookingSummary(BaseModel):
    booking_id: UUID4
    booking_time: Optional[datetime] = None
    total_amount: Decimal
    transaction_id: str
    card_mask: str
    title: str
    image_url: Optional[str] = None
    duration_mins: Optional[int] = None
    cinema_name: str
    location: str
    start_time: datetime
    screen_number: int
    seat_numbers: str  # "A1, A2"
    total_tickets: int


# Payment record (GET /admin/payments)
class PaymentRecord(BaseModel):
    booking_id: UUID4
    transaction_id: str
    booking_time: Optional[datetime] = None
    total_amount: Decimal
    card_holder: str
    card_mask: str
    user_name: str
    user_email: str
    movie_title: str


class PaymentsOverview(BaseModel):
    transactions: List[PaymentRecord]
    total_revenue: Decimal
