"""Category store."""

import logging

from sqlalchemy.orm import Session

from app.models import Category
from app.services.common import commit

logger = logging.getLogger(__name__)


def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name).all()


def find_category_by_id(db: Session, category_id: str) -> Category | None:
    return db.get(Category, category_id)


def create_category(db: Session, name: str) -> Category:
    category = Category(name=name)
    db.add(category)
    commit(db)
    db.refresh(category)
    logger.info("Category created: %s", category.name, extra={"category_id": category.id})
    return category
