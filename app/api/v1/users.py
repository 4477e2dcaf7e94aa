"""User endpoints: admin listing and deletion, self-or-admin updates."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse, Pagination
from app.schemas.users import UserOut, UsersListResponse, UserUpdate, UserUpdateResponse
from app.services import users as user_store
from app.services.access_control import Operation, Resource, decide, enforce
from app.services.common import parse_id
from app.services.pagination import page_count, parse_page_params

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> UsersListResponse:
    """List all users, newest first (admin only)."""
    params = parse_page_params(page, limit)
    users = user_store.list_users(db, params.skip, params.limit)
    total = user_store.count_users(db)
    return UsersListResponse(
        users=[UserOut.model_validate(u) for u in users],
        pagination=Pagination(
            page=params.page,
            limit=params.limit,
            total=total,
            pages=page_count(total, params.limit),
        ),
    )


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Any authenticated caller may read any user record."""
    enforce(decide(current_user, Resource.user(user_id), Operation.READ_USER))
    return UserOut.model_validate(user_store.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserUpdateResponse)
def update_user(
    user_id: str,
    body: UserUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserUpdateResponse:
    """Update own profile, or any profile as admin. Only admins may change role."""
    user_id = parse_id(user_id)
    resource = Resource.user(user_id, changes_role=body.role is not None)
    enforce(decide(current_user, resource, Operation.UPDATE_USER))
    user = user_store.get_user(db, user_id)
    user = user_store.update_user(db, user, body, caller=current_user)
    return UserUpdateResponse(id=user.id, username=user.username, email=user.email, role=user.role)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user (admin only). The user's posts are left in place."""
    enforce(decide(current_user, Resource.user(user_id), Operation.DELETE_USER))
    user = user_store.get_user(db, user_id)
    user_store.delete_user(db, user)
    return MessageResponse(message="User deleted successfully")
