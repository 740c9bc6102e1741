import datetime as dt
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field, UUID4, model_validator
from decimal import Decimal


# Showtime: Create (POST /admin/showtimes)
class ShowtimeCreate(BaseModel):
    """
    Either ``start_time`` or the admin form's ``date`` + ``time`` pair.
    Naive values are read in the configured local offset.
    """
    movie_id: UUID4
    cinema_name: str = Field(
        min_length=1, validation_alias=AliasChoices("cinema_name", "theater_name")
    )
    location: str = Field(min_length=1)
    screen_number: int = Field(ge=1)
    start_time: Optional[dt.datetime] = None
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    price_classic: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    price_prime: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    price_recliner: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    price_premium: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)

    @model_validator(mode="after")
    def combine_date_and_time(self):
        if self.start_time is None:
            if self.date is None or self.time is None:
                raise ValueError("start_time, or both date and time, are required")
            self.start_time = dt.datetime.combine(self.date, self.time)
        return self


# Showtime: public listing (GET /events/showtimes/{movie_id})
class ShowtimeListing(BaseModel):
    showtime_id: UUID4
    start_time: dt.datetime
    screen_number: int
    cinema_name: str
    location: str
    price_classic: Decimal
    price_prime: Decimal
    price_recliner: Decimal
    price_premium: Decimal


# Showtime: admin listing (GET /admin/showtimes), adds the movie title
class AdminShowtime(ShowtimeListing):
    movie_id: UUID4
    title: str


# Showtime: created (POST /admin/showtimes)
class ShowtimeCreated(BaseModel):
    message: str
    showtime_id: UUID4
    screen_id: UUID4
    start_time: dt.datetime
