from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_admin_user
from app.models.user import User
from app.models.movie import Movie
from app.models.cinema import Cinema, Screen
from app.models.showtime import Showtime
from app.schemas.showtime import ShowtimeCreate, ShowtimeCreated, AdminShowtime
from app.schemas.common import CascadeDeleteResponse, PaginatedResponse
from app.services import cascades
from app.services.showtime_registry import add_showtime

router = APIRouter(prefix="/admin/showtimes", tags=["Admin - Showtimes"])


@router.get("/", response_model=PaginatedResponse[AdminShowtime])
def list_all_showtimes(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Every showtime, past and future, latest start first."""
    query = (
        db.query(Showtime, Movie, Screen, Cinema)
        .join(Movie, Movie.id == Showtime.movie_id)
        .join(Screen, Screen.id == Showtime.screen_id)
        .join(Cinema, Cinema.id == Screen.cinema_id)
    )
    total = query.count()
    rows = (
        query.order_by(Showtime.start_time.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return PaginatedResponse(
        data=[
            AdminShowtime(
                showtime_id=st.id,
                movie_id=movie.id,
                title=movie.title,
                start_time=st.start_time,
                screen_number=screen.screen_number,
                cinema_name=cinema.name,
                location=cinema.location,
                price_classic=st.price_classic,
                price_prime=st.price_prime,
                price_recliner=st.price_recliner,
                price_premium=st.price_premium,
            )
            for st, movie, screen, cinema in rows
        ],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


@router.post("/", response_model=ShowtimeCreated, status_code=status.HTTP_201_CREATED)
def create_showtime(
    data: ShowtimeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """
    Add a showtime. The cinema (name + location) and screen are created on
    first use; a new screen gets its 100-seat layout in the same transaction.
    """
    showtime = add_showtime(db, data)
    return ShowtimeCreated(
        message="Showtime added successfully!",
        showtime_id=showtime.id,
        screen_id=showtime.screen_id,
        start_time=showtime.start_time,
    )


@router.delete("/{id}", response_model=CascadeDeleteResponse)
def delete_showtime(
    id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    deleted = cascades.delete_showtime(db, id)
    return CascadeDeleteResponse(message="Showtime deleted successfully", deleted=deleted)
