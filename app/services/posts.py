"""Post store: creation with slug derivation, listing with filters, view counting."""

from dataclasses import dataclass

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationFailedError
from app.models import Category, Post, User
from app.schemas.posts import (
    AuthorSummary,
    CategorySummary,
    PostCreate,
    PostOut,
    PostUpdate,
)
from app.services.categories import find_category_by_id
from app.services.common import commit, parse_id
from app.services.slug import slugify


@dataclass(frozen=True)
class PostFilter:
    """None means "no filter" for each field."""

    published: bool | None = None
    category_id: str | None = None


def _apply_filter(query, filters: PostFilter):
    if filters.published is not None:
        query = query.filter(Post.published == filters.published)
    if filters.category_id:
        query = query.filter(Post.category_id == filters.category_id)
    return query


def find_post_by_id(db: Session, post_id: str) -> Post | None:
    return db.get(Post, parse_id(post_id))


def get_post(db: Session, post_id: str) -> Post:
    """Return the post or raise NotFoundError("Post")."""
    post = find_post_by_id(db, post_id)
    if post is None:
        raise NotFoundError("Post")
    return post


def _require_category(db: Session, category_id: str | None) -> str | None:
    if not category_id:
        return None
    if find_category_by_id(db, category_id) is None:
        raise ValidationFailedError.for_field("category", "Category not found")
    return category_id


def create_post(db: Session, author_id: str, data: PostCreate) -> Post:
    """
    Create a post owned by author_id. The slug is derived from the title here
    and only here; a slug collision fails with DuplicateKeyError("slug").
    """
    post = Post(
        title=data.title,
        content=data.content,
        author_id=author_id,
        category_id=_require_category(db, data.category),
        tags=list(data.tags),
        published=data.published,
    )
    if not post.slug:
        post.slug = slugify(post.title)
    db.add(post)
    commit(db)
    db.refresh(post)
    return post


def update_post(db: Session, post: Post, data: PostUpdate) -> Post:
    """Apply an already-authorized partial update. The slug is left as is."""
    if data.title:
        post.title = data.title
    if data.content:
        post.content = data.content
    if "category" in data.model_fields_set:
        post.category_id = _require_category(db, data.category)
    if data.tags is not None:
        post.tags = list(data.tags)
    if data.published is not None:
        post.published = data.published
    commit(db)
    db.refresh(post)
    return post


def delete_post(db: Session, post: Post) -> None:
    db.delete(post)
    db.commit()


def increment_views(db: Session, post_id: str) -> Post:
    """Atomically add one view and return the refreshed post; NotFoundError if missing."""
    post_id = parse_id(post_id)
    result = db.execute(
        update(Post).where(Post.id == post_id).values(views=Post.views + 1)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError("Post")
    db.commit()
    return db.get(Post, post_id)


def count_posts(db: Session, filters: PostFilter) -> int:
    return _apply_filter(db.query(Post), filters).count()


def list_posts(db: Session, filters: PostFilter, skip: int, limit: int) -> list[Post]:
    """One page of posts, newest first. Orphaned posts are still included here."""
    return (
        _apply_filter(db.query(Post), filters)
        .order_by(Post.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def _users_by_id(db: Session, ids: set[str]) -> dict[str, User]:
    if not ids:
        return {}
    return {u.id: u for u in db.query(User).filter(User.id.in_(ids)).all()}


def _categories_by_id(db: Session, ids: set[str]) -> dict[str, Category]:
    if not ids:
        return {}
    return {c.id: c for c in db.query(Category).filter(Category.id.in_(ids)).all()}


def to_post_out(post: Post, author: User | None, category: Category | None) -> PostOut:
    return PostOut(
        id=post.id,
        title=post.title,
        content=post.content,
        slug=post.slug,
        author=(
            AuthorSummary(id=author.id, username=author.username, email=author.email)
            if author is not None
            else None
        ),
        category=(
            CategorySummary(id=category.id, name=category.name)
            if category is not None
            else None
        ),
        tags=list(post.tags or []),
        published=post.published,
        views=post.views,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def serialize_post(db: Session, post: Post) -> PostOut:
    """Resolve author and category for a single post (author may be None)."""
    author = db.get(User, post.author_id)
    category = db.get(Category, post.category_id) if post.category_id else None
    return to_post_out(post, author, category)


def list_visible_posts(
    db: Session, filters: PostFilter, skip: int, limit: int
) -> tuple[list[PostOut], int]:
    """
    Return (page, total). Posts whose author no longer exists are dropped from
    the page after fetching; total is counted before that filter, so a page may
    hold fewer than limit items.
    """
    rows = list_posts(db, filters, skip, limit)
    total = count_posts(db, filters)
    authors = _users_by_id(db, {p.author_id for p in rows})
    categories = _categories_by_id(db, {p.category_id for p in rows if p.category_id})
    visible = [
        to_post_out(p, authors[p.author_id], categories.get(p.category_id))
        for p in rows
        if p.author_id in authors
    ]
    return visible, total
