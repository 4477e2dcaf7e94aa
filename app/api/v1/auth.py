"""Registration, login, and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import MalformedIdError, UnauthenticatedError
from app.core.security import create_access_token, decode_access_token
from app.models import User
from app.schemas.auth import (
    AuthResponse,
    AuthUser,
    CurrentUser,
    LoginRequest,
    MeResponse,
    MeUser,
    RegisterRequest,
)
from app.services.access_control import Operation, Resource, decide, enforce
from app.services.users import authenticate_user, create_user, find_user_by_id, get_user

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _issue_token(user: User) -> str:
    return create_access_token(sub=user.id, username=user.username, email=user.email)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Create an account and return a session token for it."""
    user = create_user(db, username=body.username, email=body.email, password=body.password)
    return AuthResponse(
        message="User registered successfully",
        token=_issue_token(user),
        user=AuthUser.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT session token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = authenticate_user(db, email=body.email, password=body.password)
    return AuthResponse(
        message="Login successful",
        token=_issue_token(user),
        user=AuthUser.model_validate(user),
    )


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser | None:
    """Dependency: the caller if a Bearer token is present, else None. Bad tokens still raise 401."""
    if credentials is None:
        return None
    claims = decode_access_token(credentials.credentials)
    try:
        user = find_user_by_id(db, claims.sub)
    except MalformedIdError:
        user = None
    if user is None:
        raise UnauthenticatedError("User not found")
    return CurrentUser.model_validate(user)


def get_current_user(
    caller: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> CurrentUser:
    """Dependency: require a valid Bearer token. Raises 401 if missing or invalid."""
    if caller is None:
        raise UnauthenticatedError("No token provided")
    return caller


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require role 'admin'. Raises 403 for everyone else."""
    enforce(decide(current_user, Resource.user(), Operation.LIST_USERS))
    return current_user


@router.get("/me", response_model=MeResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MeResponse:
    """Profile of the authenticated caller."""
    user = get_user(db, current_user.id)
    return MeResponse(user=MeUser.model_validate(user))
