"""SQLAlchemy declarative Base."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base shared by users, posts and categories."""

    pass
