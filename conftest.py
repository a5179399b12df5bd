"""Shared fixtures: a fresh in-memory database and app per test."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from blog_api.core.security import create_user_token
from blog_api.crud import crud_category, crud_comment, crud_post, crud_user
from blog_api.database import Database
from blog_api.main import create_app
from blog_api.models.post import PostStatus
from blog_api.schemas.category import CategoryCreate
from blog_api.schemas.post import PostCreate
from blog_api.schemas.user import UserCreate


@pytest.fixture
def database():
    """In-memory SQLite handle; the app lifespan creates tables and disposes it."""
    return Database("sqlite://")


@pytest.fixture
def client(database):
    app = create_app(database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client, database):
    """Session for arranging data and checking storage directly."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()


def make_user(db, name="John Doe", email="john@example.com", password="password123", role="user"):
    return crud_user.create_user(
        db, user_in=UserCreate(name=name, email=email, password=password), role_name=role
    )


def auth_headers(user):
    return {"Authorization": f"Bearer {create_user_token(user.id)}"}


def make_post(db, author, category, title="A first post", content="Some content long enough",
              status=PostStatus.PUBLISHED, **extra):
    post_in = PostCreate(title=title, content=content, category=str(category.id), status=status, **extra)
    return crud_post.create_post(db, author_id=author.id, category=category, post_in=post_in)


def make_comment(db, post, author, text="Nice post", parent=None):
    return crud_comment.create_comment(
        db,
        post=post,
        author_id=author.id,
        text=text,
        parent_comment_id=parent.id if parent else None,
    )


@pytest.fixture
def user(db):
    return make_user(db)


@pytest.fixture
def other_user(db):
    return make_user(db, name="Jane Smith", email="jane@example.com")


@pytest.fixture
def admin(db):
    return make_user(db, name="Admin User", email="admin@example.com", password="admin123", role="admin")


@pytest.fixture
def category(db):
    return crud_category.create(db, obj_in=CategoryCreate(name="Technology", description="Tech articles"))
