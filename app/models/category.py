"""ORM model for post categories."""

from sqlalchemy import Column, DateTime, String

from app.models.base import Base
from app.models.user import new_id, utcnow


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(50), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
