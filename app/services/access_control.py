"""
Authorization decisions: who may read, write, or delete which resource.

decide() is a pure function of (caller, resource, operation). It never touches
the database; handlers load the resource, ask for a decision, and only mutate
after an allow. enforce() turns a deny into the matching typed error.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol

from app.core.errors import ForbiddenError, UnauthenticatedError

ADMIN_ROLE = "admin"
USER_ROLE = "user"
ROLES = (USER_ROLE, ADMIN_ROLE)

ADMIN_REQUIRED = "Access denied. Admin role required."


class Caller(Protocol):
    """Anything with an id and a role (CurrentUser, User ORM row)."""

    id: str
    role: str


class Operation(str, Enum):
    READ_POST = "read_post"
    LIST_POSTS = "list_posts"
    CREATE_POST = "create_post"
    UPDATE_POST = "update_post"
    DELETE_POST = "delete_post"
    READ_USER = "read_user"
    LIST_USERS = "list_users"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"
    CREATE_CATEGORY = "create_category"


PUBLIC_OPERATIONS = frozenset({Operation.READ_POST, Operation.LIST_POSTS})


@dataclass(frozen=True)
class Resource:
    """
    What the caller wants to act on.

    owner_id is the post author id for posts and the target user id for users.
    changes_role is set when a user update carries a role field.
    """

    kind: Literal["post", "user", "category"]
    owner_id: str | None = None
    changes_role: bool = False

    @classmethod
    def post(cls, author_id: str | None = None) -> "Resource":
        return cls(kind="post", owner_id=author_id)

    @classmethod
    def user(cls, user_id: str | None = None, changes_role: bool = False) -> "Resource":
        return cls(kind="user", owner_id=user_id, changes_role=changes_role)

    @classmethod
    def category(cls) -> "Resource":
        return cls(kind="category")


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Literal["unauthenticated", "forbidden"] | None = None
    message: str | None = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def forbidden(cls, message: str) -> "Decision":
        return cls(allowed=False, reason="forbidden", message=message)

    @classmethod
    def unauthenticated(cls) -> "Decision":
        return cls(
            allowed=False,
            reason="unauthenticated",
            message=UnauthenticatedError.message,
        )


def is_admin(caller: Caller | None) -> bool:
    return caller is not None and caller.role == ADMIN_ROLE


def _is_owner(caller: Caller, resource: Resource) -> bool:
    return resource.owner_id is not None and str(caller.id) == str(resource.owner_id)


def decide(caller: Caller | None, resource: Resource, operation: Operation) -> Decision:
    """Return Allow or Deny(reason) for caller acting on resource. First matching rule wins."""
    if operation in PUBLIC_OPERATIONS:
        return Decision.allow()
    if caller is None:
        return Decision.unauthenticated()

    if operation == Operation.CREATE_POST:
        return Decision.allow()

    if operation in (Operation.UPDATE_POST, Operation.DELETE_POST):
        if _is_owner(caller, resource) or is_admin(caller):
            return Decision.allow()
        verb = "update" if operation == Operation.UPDATE_POST else "delete"
        return Decision.forbidden(f"Not authorized to {verb} this post")

    if operation == Operation.READ_USER:
        return Decision.allow()

    if operation == Operation.UPDATE_USER:
        if not _is_owner(caller, resource) and not is_admin(caller):
            return Decision.forbidden("Not authorized to update this user")
        if resource.changes_role and not is_admin(caller):
            return Decision.forbidden("Only admin can change user role")
        return Decision.allow()

    if operation in (Operation.LIST_USERS, Operation.DELETE_USER, Operation.CREATE_CATEGORY):
        if is_admin(caller):
            return Decision.allow()
        return Decision.forbidden(ADMIN_REQUIRED)

    return Decision.forbidden("Operation not permitted")


def enforce(decision: Decision) -> None:
    """Raise UnauthenticatedError or ForbiddenError for a deny; no-op for an allow."""
    if decision.allowed:
        return
    if decision.reason == "unauthenticated":
        raise UnauthenticatedError(decision.message)
    raise ForbiddenError(decision.message)
