"""Shared schema building blocks: camelCase output, input cleaners, pagination."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys (createdAt, updatedAt)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def clean_email(value: object) -> object:
    """Trim and lowercase an email before syntax validation."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def strip_text(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


class Pagination(BaseModel):
    """Pagination block of list responses."""

    page: int
    limit: int
    total: int
    pages: int


class MessageResponse(BaseModel):
    message: str
