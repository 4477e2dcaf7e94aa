"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    TokenClaims,
)
from app.schemas.categories import CategoriesListResponse, CategoryCreate, CategoryOut
from app.schemas.common import MessageResponse, Pagination
from app.schemas.health import HealthResponse
from app.schemas.posts import PostCreate, PostOut, PostsListResponse, PostUpdate
from app.schemas.users import UserOut, UsersListResponse, UserUpdate, UserUpdateResponse

__all__ = [
    "AuthResponse",
    "CategoriesListResponse",
    "CategoryCreate",
    "CategoryOut",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "PostCreate",
    "PostOut",
    "PostsListResponse",
    "PostUpdate",
    "RegisterRequest",
    "TokenClaims",
    "UserOut",
    "UsersListResponse",
    "UserUpdate",
    "UserUpdateResponse",
]
