from app.schemas.common import (
    PaginatedResponse, MessageResponse, CascadeResult, CascadeDeleteResponse,
)
from app.schemas.user import (
    User, UserCreate, AdminCreate, UserUpdate, UserDetail, PasswordChange, Token,
)
from app.schemas.movie import Movie, MovieCreate
from app.schemas.showtime import ShowtimeCreate, ShowtimeCreated, ShowtimeListing, AdminShowtime
from app.schemas.seat import SeatAvailability
from app.schemas.booking import (
    PaymentDetails, BookingCreate, BookingCreated, BookingCancelResponse, BookingNotice,
    BookingSummary, PaymentRecord, PaymentsOverview,
)
from app.schemas.notification import Notification, NotificationFeed
