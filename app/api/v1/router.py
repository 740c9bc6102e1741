from fastapi import APIRouter

# Auth
from app.api.v1.public.auth import router as auth_router

# Public: movies, showtimes, seats, bookings
from app.api.v1.public.events import router as events_router

# Admin
from app.api.v1.admin.movies import router as admin_movies_router
from app.api.v1.admin.showtimes import router as admin_showtimes_router
from app.api.v1.admin.users import router as admin_users_router
from app.api.v1.admin.bookings import router as admin_bookings_router
from app.api.v1.admin.payments import router as admin_payments_router
from app.api.v1.admin.notifications import router as admin_notifications_router

api_router = APIRouter()

# --- Auth ---
api_router.include_router(auth_router)

# --- Public ---
api_router.include_router(events_router)

# --- Admin ---
api_router.include_router(admin_movies_router)
api_router.include_router(admin_showtimes_router)
api_router.include_router(admin_users_router)
api_router.include_router(admin_bookings_router)
api_router.include_router(admin_payments_router)
api_router.include_router(admin_notifications_router)
