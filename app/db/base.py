from app.db.session import Base
from app.models.user import User
from app.models.movie import Movie
from app.models.cinema import Cinema, Screen
from app.models.seat import Seat
from app.models.showtime import Showtime
from app.models.booking import Booking, Ticket
from app.models.notification import Notification
