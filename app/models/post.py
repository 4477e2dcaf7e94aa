"""ORM model for blog posts."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Index, Integer, String, Text

from app.models.base import Base
from app.models.user import new_id, utcnow


class Post(Base):
    """
    A blog post owned by its author.

    author_id is a plain column, not a foreign key: deleting a user leaves the
    user's posts in place, and listings drop posts whose author no longer
    resolves. slug is set once at creation and never recomputed.
    """

    __tablename__ = "posts"
    __table_args__ = (Index("ix_posts_author_id_created_at", "author_id", "created_at"),)

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(String(36), nullable=False)
    category_id = Column(String(36), nullable=True, index=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    tags = Column(JSON, nullable=False, default=list)
    published = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
