"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.common import CamelModel, clean_email, strip_text


class RegisterRequest(BaseModel):
    """Registration payload."""

    username: str = Field(..., min_length=3, max_length=30, description="Username")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, max_length=128, description="Password")

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        return strip_text(v)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return clean_email(v)


class LoginRequest(BaseModel):
    """Credentials for login. Missing fields are a 400; wrong values are a 401."""

    email: str = Field(..., min_length=1, description="Email address")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return clean_email(v)


class TokenClaims(BaseModel):
    """Decoded payload of a session token."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    username: str | None = None
    email: str | None = None
    iat: datetime
    exp: datetime


class CurrentUser(BaseModel):
    """Authenticated caller (loaded from the database on every request)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    role: str


class AuthUser(BaseModel):
    """User summary returned alongside a token (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    role: str


class AuthResponse(BaseModel):
    """Response for register and login."""

    message: str
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    user: AuthUser


class MeUser(CamelModel):
    id: str
    username: str
    email: str
    role: str
    created_at: datetime


class MeResponse(BaseModel):
    """Response for GET /auth/me."""

    user: MeUser
