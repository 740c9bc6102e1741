from typing import Optional, List
from pydantic import BaseModel, UUID4
from datetime import datetime


class Notification(BaseModel):
    id: UUID4
    message: str
    type: str
    is_read: bool = False
    reference_id: Optional[UUID4] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# GET /admin/notifications: newest five up front, the rest as history
class NotificationFeed(BaseModel):
    latest: List[Notification]
    history: List[Notification]
    unread: int
