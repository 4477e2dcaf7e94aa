"""Store helpers shared by the user, post and category services."""

import re
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateKeyError, MalformedIdError

# Checked in order: "username" must win over "name".
UNIQUE_FIELDS = ("username", "email", "slug", "name")

# SQLite: "UNIQUE constraint failed: users.email"
_SQLITE_UNIQUE = re.compile(r"unique constraint failed: \w+\.(\w+)", re.IGNORECASE)
# PostgreSQL: 'violates unique constraint "ix_users_email"' / "Key (email)=(...)"
_PG_CONSTRAINT = re.compile(r'unique constraint "(\w+)"', re.IGNORECASE)
_PG_KEY = re.compile(r"key \((\w+)\)=", re.IGNORECASE)


def parse_id(raw: str) -> str:
    """Return the canonical form of a resource id; MalformedIdError if it is not a UUID."""
    try:
        return str(uuid.UUID(str(raw)))
    except (TypeError, ValueError) as e:
        raise MalformedIdError() from e


def field_for_constraint(name: str) -> str | None:
    """Map an index or constraint name (ix_users_email, users_email_key) to its field."""
    name = name.lower()
    if name.endswith("_key"):
        name = name[: -len("_key")]
    for field in UNIQUE_FIELDS:
        if name == field or name.endswith(f"_{field}"):
            return field
    return None


def duplicate_key_error(exc: IntegrityError) -> DuplicateKeyError:
    """
    Name the field whose unique constraint rejected the write.

    Only the constraint or column name is consulted, never the rejected value,
    which may itself contain a field name.
    """
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        field = field_for_constraint(constraint)
        if field:
            return DuplicateKeyError(field)

    detail = str(exc.orig)
    match = _SQLITE_UNIQUE.search(detail) or _PG_KEY.search(detail)
    if match and match.group(1).lower() in UNIQUE_FIELDS:
        return DuplicateKeyError(match.group(1).lower())
    match = _PG_CONSTRAINT.search(detail)
    if match:
        field = field_for_constraint(match.group(1))
        if field:
            return DuplicateKeyError(field)
    return DuplicateKeyError("value")


def commit(db: Session) -> None:
    """Commit, turning a unique-constraint violation into DuplicateKeyError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise duplicate_key_error(e) from e
