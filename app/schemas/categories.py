"""Schemas for post categories."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import CamelModel, strip_text


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return strip_text(v)


class CategoryOut(CamelModel):
    id: str
    name: str
    created_at: datetime


class CategoriesListResponse(BaseModel):
    categories: list[CategoryOut]
