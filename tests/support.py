"""Shared base classes for tests that need a database or an HTTP client."""

import unittest

from fastapi.testclient import TestClient

from app.core.database import SessionLocal, engine
from app.core.security import create_access_token
from app.main import app
from app.models import Base, Category, Post, User
from app.schemas.posts import PostCreate
from app.services.posts import create_post
from app.services.users import create_user


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory schema per test."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)

    def make_user(
        self,
        username: str = "writer",
        email: str | None = None,
        password: str = "password123",
        role: str = "user",
    ) -> User:
        return create_user(
            self.db,
            username=username,
            email=email or f"{username}@example.com",
            password=password,
            role=role,
        )

    def make_post(
        self,
        author: User,
        title: str = "First post",
        content: str = "Some content long enough.",
        **kwargs: object,
    ) -> Post:
        return create_post(
            self.db,
            author_id=author.id,
            data=PostCreate(title=title, content=content, **kwargs),
        )

    def make_category(self, name: str = "News") -> Category:
        category = Category(name=name)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient bound to the same database."""

    def setUp(self) -> None:
        super().setUp()
        self.client = TestClient(app)

    def auth_headers(self, user: User) -> dict[str, str]:
        token = create_access_token(sub=user.id, username=user.username, email=user.email)
        return {"Authorization": f"Bearer {token}"}
