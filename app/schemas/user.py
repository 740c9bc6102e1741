from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field, UUID4, field_validator
from datetime import datetime

from app.schemas.booking import BookingSummary


# Shared properties
class UserBase(BaseModel):
    email: EmailStr
    full_name: str = Field(min_length=1)
    mobile_number: str = Field(min_length=5, max_length=20)
    avatar_url: Optional[str] = None


# Properties to receive via API on creation (POST /auth/register)
class UserCreate(UserBase):
    password: str = Field(min_length=6)


# Properties to receive via API on admin creation (POST /auth/admin/register)
class AdminCreate(UserCreate):
    admin_secret: str


# Properties to receive via API on update (PUT /auth/profile)
class UserUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1)
    mobile_number: Optional[str] = Field(None, min_length=5, max_length=20)
    avatar_url: Optional[str] = None

    # Omitted means unchanged; null would violate NOT NULL columns
    @field_validator("full_name", "mobile_number")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


# PUT /auth/change-password
class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)


class UserInDBBase(UserBase):
    id: UUID4
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Properties returned via API
class User(UserInDBBase):
    pass


# Admin user detail (GET /admin/users/{id})
class UserDetail(BaseModel):
    user: User
    bookings: List[BookingSummary]


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    user: User
