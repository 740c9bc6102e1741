from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db, transaction
from app.api.deps import get_current_admin_user
from app.models.user import User
from app.models.notification import Notification
from app.schemas.notification import NotificationFeed
from app.schemas.common import MessageResponse

router = APIRouter(prefix="/admin/notifications", tags=["Admin - Notifications"])

FEED_SIZE = 50
LATEST_SIZE = 5


@router.get("/", response_model=NotificationFeed)
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """The 50 most recent admin notifications: newest five, then the rest."""
    notifications = (
        db.query(Notification)
        .order_by(Notification.created_at.desc())
        .limit(FEED_SIZE)
        .all()
    )
    unread = (
        db.query(Notification)
        .filter(Notification.is_read == False)  # noqa: E712
        .count()
    )
    return NotificationFeed(
        latest=notifications[:LATEST_SIZE],
        history=notifications[LATEST_SIZE:],
        unread=unread,
    )


@router.put("/read", response_model=MessageResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    with transaction(db):
        db.query(Notification).filter(
            Notification.is_read == False,  # noqa: E712
        ).update({"is_read": True}, synchronize_session="fetch")
    return MessageResponse(message="Notifications marked as read")
