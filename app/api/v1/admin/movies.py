from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db, transaction
from app.api.deps import get_current_admin_user
from app.models.user import User
from app.models.movie import Movie
from app.schemas.movie import MovieCreate, Movie as MovieSchema
from app.schemas.common import CascadeDeleteResponse
from app.services import cascades

router = APIRouter(prefix="/admin/movies", tags=["Admin - Movies"])


@router.get("/", response_model=List[MovieSchema])
def list_movies(
    search: Optional[str] = Query(None, description="Case-insensitive title search"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    query = db.query(Movie)
    if search:
        query = query.filter(Movie.title.ilike(f"%{search}%"))
    return query.order_by(Movie.created_at.desc()).all()


@router.post("/", response_model=MovieSchema, status_code=status.HTTP_201_CREATED)
def create_movie(
    data: MovieCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    with transaction(db):
        movie = Movie(**data.model_dump())
        db.add(movie)
    db.refresh(movie)
    return movie


@router.delete("/{id}", response_model=CascadeDeleteResponse)
def delete_movie(
    id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Delete a movie with its showtimes and every booking and ticket under them."""
    deleted = cascades.delete_movie(db, id)
    return CascadeDeleteResponse(message="Movie deleted successfully", deleted=deleted)
