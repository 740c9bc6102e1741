from typing import Optional
from pydantic import BaseModel, Field, UUID4
from datetime import datetime


class MovieBase(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    duration_mins: Optional[int] = Field(None, ge=1)
    genre: Optional[str] = None
    image_url: Optional[str] = None


# Movie: Create (POST /admin/movies)
class MovieCreate(MovieBase):
    pass


class Movie(MovieBase):
    id: UUID4
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
