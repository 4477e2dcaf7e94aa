"""User store: registration, credential checks, lookups and admin mutations."""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.errors import (
    DuplicateUserError,
    InvalidCredentialsError,
    NotFoundError,
)
from app.core.security import hash_password, verify_password
from app.models import User
from app.schemas.common import clean_email
from app.schemas.users import UserUpdate
from app.services.access_control import USER_ROLE, Caller, is_admin
from app.services.common import commit, parse_id

logger = logging.getLogger(__name__)


def find_user_by_email_or_username(db: Session, email: str, username: str) -> User | None:
    return (
        db.query(User)
        .filter(or_(User.email == clean_email(email), User.username == username))
        .first()
    )


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == clean_email(email)).first()


def find_user_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, parse_id(user_id))


def get_user(db: Session, user_id: str) -> User:
    """Return the user or raise NotFoundError("User")."""
    user = find_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User")
    return user


def create_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    role: str = USER_ROLE,
) -> User:
    """
    Create a user, hashing the password on write.

    Rejects with DuplicateUserError when the username or the normalized email is
    taken. A concurrent registration that slips past the pre-check is rejected
    by the unique indexes as DuplicateKeyError.
    """
    email = clean_email(email)
    if find_user_by_email_or_username(db, email, username) is not None:
        raise DuplicateUserError()
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    commit(db)
    db.refresh(user)
    logger.info(
        "New user registered: %s",
        user.username,
        extra={"user_id": user.id, "role": user.role},
    )
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Return the user for valid credentials; InvalidCredentialsError otherwise."""
    normalized = clean_email(email)
    user = find_user_by_email(db, normalized)
    if user is None:
        logger.warning(
            "Login attempt failed: user not found for email %s",
            normalized,
            extra={"email": normalized, "reason": "unknown_email"},
        )
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.warning(
            "Login attempt failed: invalid password for user %s",
            user.username,
            extra={"user_id": user.id, "reason": "bad_password"},
        )
        raise InvalidCredentialsError()
    logger.info("User logged in: %s", user.username, extra={"user_id": user.id})
    return user


def count_users(db: Session) -> int:
    return db.query(User).count()


def list_users(db: Session, skip: int, limit: int) -> list[User]:
    """Newest users first."""
    return (
        db.query(User)
        .order_by(User.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def update_user(db: Session, user: User, changes: UserUpdate, caller: Caller) -> User:
    """
    Apply an already-authorized partial update.

    role is applied only for admin callers. password_hash is recomputed only
    when a new password is supplied.
    """
    if changes.username:
        user.username = changes.username
    if changes.email:
        user.email = clean_email(changes.email)
    if changes.role and is_admin(caller):
        user.role = changes.role
    if changes.password:
        user.password_hash = hash_password(changes.password)
    commit(db)
    db.refresh(user)
    logger.info("User updated: %s", user.username, extra={"user_id": user.id})
    return user


def delete_user(db: Session, user: User) -> None:
    """Delete the user. Their posts stay behind as orphans."""
    username, user_id = user.username, user.id
    db.delete(user)
    db.commit()
    logger.info("User deleted: %s", username, extra={"user_id": user_id})
