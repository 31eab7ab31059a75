from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# --- User / Profile ---

class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(max_length=255)
    bio: str | None = None
    image: str | None = Field(None, max_length=500)


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    bio: str | None
    image: str | None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class Profile(BaseModel):
    username: str
    bio: str | None = None
    image: str | None = None
    following: bool = False


# --- Article ---

class ArticleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(max_length=500)
    body: str
    tags: list[str] = []


class ArticleUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=500)
    body: str | None = None


class ArticleView(BaseModel):
    """Denormalised article as returned to clients."""

    id: int
    slug: str
    title: str
    description: str
    body: str
    author: Profile
    favorited: bool
    favorites_count: int
    created_at: datetime
    updated_at: datetime
    tags: list[str] = []


class MultipleArticles(BaseModel):
    articles: list[ArticleView]
    articles_count: int


# --- Comment ---

class CommentCreate(BaseModel):
    body: str = Field(min_length=1)


class CommentView(BaseModel):
    id: int
    article_id: int
    author_id: int
    body: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Tags ---

class TagList(BaseModel):
    tags: list[str]


# ---------------------------------------------------------------------------
# Workflow inputs (internal, not request bodies)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreateArticle:
    user_id: int
    title: str
    description: str
    body: str
    tags: Iterable[str] = ()


@dataclass(frozen=True)
class UpdateArticle:
    slug: str
    user_id: int
    title: str | None = None
    description: str | None = None
    body: str | None = None


@dataclass(frozen=True)
class GetFeed:
    user_id: int
    limit: int
    offset: int
