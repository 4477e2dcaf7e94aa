"""Category endpoints: public list, admin create."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.categories import CategoriesListResponse, CategoryCreate, CategoryOut
from app.services import categories as category_store
from app.services.access_control import Operation, Resource, decide, enforce

router = APIRouter()


@router.get("", response_model=CategoriesListResponse)
def list_categories(db: Annotated[Session, Depends(get_db)]) -> CategoriesListResponse:
    return CategoriesListResponse(
        categories=[CategoryOut.model_validate(c) for c in category_store.list_categories(db)]
    )


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> CategoryOut:
    """Create a category (admin only)."""
    enforce(decide(current_user, Resource.category(), Operation.CREATE_CATEGORY))
    return CategoryOut.model_validate(category_store.create_category(db, body.name))
