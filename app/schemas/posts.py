"""Request/response schemas for post endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import CamelModel, Pagination, strip_text


def _clean_tags(value: object) -> object:
    if isinstance(value, list):
        return [t.strip() if isinstance(t, str) else t for t in value]
    return value


class PostCreate(BaseModel):
    """Create payload; the caller becomes the author."""

    title: str = Field(..., min_length=3, max_length=200)
    content: str = Field(..., min_length=10)
    category: str | None = Field(default=None, description="Category id")
    tags: list[str] = Field(default_factory=list)
    published: bool = False

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_fields(cls, v: object) -> object:
        return strip_text(v)

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, v: object) -> object:
        if v is None:
            return []
        return _clean_tags(v)


class PostUpdate(BaseModel):
    """
    Partial update. Empty title or content leaves the stored value untouched;
    an explicit null category clears it.
    """

    title: str | None = Field(default=None, min_length=3, max_length=200)
    content: str | None = Field(default=None, min_length=10)
    category: str | None = None
    tags: list[str] | None = None
    published: bool | None = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_fields(cls, v: object) -> object:
        v = strip_text(v)
        return v or None

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, v: object) -> object:
        return _clean_tags(v)


class AuthorSummary(BaseModel):
    id: str
    username: str
    email: str


class CategorySummary(BaseModel):
    id: str
    name: str


class PostOut(CamelModel):
    id: str
    title: str
    content: str
    slug: str
    author: AuthorSummary | None
    category: CategorySummary | None
    tags: list[str]
    published: bool
    views: int
    created_at: datetime
    updated_at: datetime


class PostsListResponse(BaseModel):
    posts: list[PostOut]
    pagination: Pagination
