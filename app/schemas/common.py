from typing import List, Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


# Paginated response wrapper: used by admin list endpoints
class PaginatedResponse(BaseModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int


# Plain acknowledgement for mutations that return no resource
class MessageResponse(BaseModel):
    message: str


# Row counts removed by an admin cascade delete
class CascadeResult(BaseModel):
    tickets: int = 0
    bookings: int = 0
    showtimes: int = 0


class CascadeDeleteResponse(MessageResponse):
    deleted: CascadeResult
