from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_admin_user
from app.models.user import User
from app.schemas.common import CascadeDeleteResponse
from app.services import cascades

router = APIRouter(prefix="/admin/bookings", tags=["Admin - Bookings"])


@router.delete("/{id}", response_model=CascadeDeleteResponse)
def delete_booking(
    id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Remove any user's booking and its tickets. No ownership check."""
    deleted = cascades.delete_booking(db, id)
    return CascadeDeleteResponse(message="Booking deleted successfully", deleted=deleted)
