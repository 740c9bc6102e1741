from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_admin_user
from app.services.booking_history import load_booking_summaries
from app.models.user import User
from app.schemas.user import User as UserSchema, UserDetail
from app.schemas.common import CascadeDeleteResponse, PaginatedResponse
from app.services import cascades

router = APIRouter(prefix="/admin/users", tags=["Admin - Users"])


@router.get("/", response_model=PaginatedResponse[UserSchema])
def list_users(
    role: Optional[str] = Query(None, description="Filter by role: user, admin"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)

    total = query.count()
    users = (
        query.order_by(User.role, User.full_name)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return PaginatedResponse(
        data=users,
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


@router.get("/{id}", response_model=UserDetail)
def get_user_details(
    id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """A user's profile together with their bookings."""
    user = db.query(User).filter(User.id == id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserDetail(
        user=UserSchema.model_validate(user),
        bookings=load_booking_summaries(db, user.id),
    )


@router.delete("/{id}", response_model=CascadeDeleteResponse)
def delete_user(
    id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Delete a user together with their bookings and tickets."""
    if id == current_user.id:
        raise HTTPException(status_code=400, detail="Admins cannot delete their own account")
    deleted = cascades.delete_user(db, id)
    return CascadeDeleteResponse(message="User deleted successfully", deleted=deleted)
