"""Post endpoints: public reads, authenticated create, author-or-admin update/delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse, Pagination
from app.schemas.posts import PostCreate, PostOut, PostsListResponse, PostUpdate
from app.services import posts as post_store
from app.services.access_control import Operation, Resource, decide, enforce
from app.services.pagination import page_count, parse_page_params, parse_published

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=PostsListResponse)
def list_posts(
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
    published: Annotated[str | None, Query()] = None,
    category: Annotated[str | None, Query()] = None,
) -> PostsListResponse:
    """
    List posts newest first.

    published: omit for all posts, "true" for published only, anything else for
    unpublished only. Posts whose author was deleted are left out of the page,
    but still counted in pagination.total.
    """
    enforce(decide(None, Resource.post(), Operation.LIST_POSTS))
    params = parse_page_params(page, limit)
    filters = post_store.PostFilter(
        published=parse_published(published),
        category_id=category or None,
    )
    posts, total = post_store.list_visible_posts(db, filters, params.skip, params.limit)
    return PostsListResponse(
        posts=posts,
        pagination=Pagination(
            page=params.page,
            limit=params.limit,
            total=total,
            pages=page_count(total, params.limit),
        ),
    )


@router.get("/{post_id}", response_model=PostOut)
def get_post(
    post_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> PostOut:
    """Return one post and count the view."""
    enforce(decide(None, Resource.post(), Operation.READ_POST))
    post = post_store.increment_views(db, post_id)
    return post_store.serialize_post(db, post)


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PostOut:
    """Create a post; the caller becomes its author."""
    enforce(decide(current_user, Resource.post(), Operation.CREATE_POST))
    post = post_store.create_post(db, author_id=current_user.id, data=body)
    logger.info(
        "Post %s created by %s",
        post.id,
        current_user.username,
        extra={"post_id": post.id, "user_id": current_user.id, "slug": post.slug},
    )
    return post_store.serialize_post(db, post)


@router.put("/{post_id}", response_model=PostOut)
def update_post(
    post_id: str,
    body: PostUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PostOut:
    """Update a post (author or admin only)."""
    post = post_store.get_post(db, post_id)
    enforce(decide(current_user, Resource.post(post.author_id), Operation.UPDATE_POST))
    post = post_store.update_post(db, post, body)
    logger.info(
        "Post %s updated by %s",
        post.id,
        current_user.username,
        extra={"post_id": post.id, "user_id": current_user.id},
    )
    return post_store.serialize_post(db, post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a post (author or admin only)."""
    post = post_store.get_post(db, post_id)
    enforce(decide(current_user, Resource.post(post.author_id), Operation.DELETE_POST))
    post_store.delete_post(db, post)
    logger.info(
        "Post %s deleted by %s",
        post_id,
        current_user.username,
        extra={"post_id": post_id, "user_id": current_user.id},
    )
    return MessageResponse(message="Post deleted successfully")
