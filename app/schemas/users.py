"""Request/response schemas for user endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.common import CamelModel, Pagination, clean_email, strip_text


class UserOut(CamelModel):
    """Public user record (never includes the password hash)."""

    id: str
    username: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserOut]
    pagination: Pagination


class UserUpdate(BaseModel):
    """Partial update. role is admin-only; password is re-hashed when present."""

    username: str | None = Field(default=None, min_length=3, max_length=30)
    email: EmailStr | None = None
    role: Literal["user", "admin"] | None = None
    password: str | None = Field(default=None, min_length=6, max_length=128)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        return strip_text(v)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return clean_email(v)


class UserUpdateResponse(BaseModel):
    id: str
    username: str
    email: str
    role: str
