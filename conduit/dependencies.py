from typing import TypeVar

from fastapi import Depends, Header, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from conduit.config import settings
from conduit.database import get_db
from conduit.errors import DomainError
from conduit.repositories import (
    ArticleRepository,
    FavoriteRepository,
    TagRepository,
    UserRepository,
)
from conduit.result import Err, Result
from conduit.services.article_service import ArticleService
from conduit.services.slug import SlugGenerator
from conduit.services.user_service import UserService

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Caller identity
# ---------------------------------------------------------------------------

async def get_current_user_id(
    x_user_id: int | None = Header(None, description="Authenticated user id set by the gateway."),
) -> int:
    """
    Identity of the caller, as established by the upstream authentication
    gateway.  Missing header means an anonymous request, rejected with 401.
    """
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


async def get_optional_user_id(
    x_user_id: int | None = Header(None, description="Authenticated user id set by the gateway."),
) -> int | None:
    return x_user_id


# ---------------------------------------------------------------------------
# Feed pagination
# ---------------------------------------------------------------------------

class FeedParams:
    """
    Query parameters for the feed endpoint.

    Attributes
    ----------
    limit:
        Maximum number of articles returned, clamped to
        ``settings.MAX_FEED_LIMIT`` regardless of the value supplied.
    offset:
        Number of articles to skip (0-based).
    """

    def __init__(
        self,
        limit: int = Query(
            settings.DEFAULT_FEED_LIMIT,
            ge=1,
            description="Maximum number of articles to return.",
        ),
        offset: int = Query(
            0,
            ge=0,
            description="Number of articles to skip.",
        ),
    ) -> None:
        self.limit = min(limit, settings.MAX_FEED_LIMIT)
        self.offset = offset


# ---------------------------------------------------------------------------
# Service wiring (one set of collaborators per request session)
# ---------------------------------------------------------------------------

def get_article_service(db: AsyncSession = Depends(get_db)) -> ArticleService:
    return ArticleService(
        slug_generator=SlugGenerator(max_attempts=settings.SLUG_MAX_ATTEMPTS),
        articles=ArticleRepository(db),
        users=UserRepository(db),
        tags=TagRepository(db),
        favorites=FavoriteRepository(db),
    )


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


# ---------------------------------------------------------------------------
# Result unwrapping
# ---------------------------------------------------------------------------

def unwrap(result: Result[T, DomainError]) -> T:
    """Return the value of an ``Ok`` or raise the ``HTTPException`` matching an ``Err``."""
    if isinstance(result, Err):
        raise HTTPException(status_code=result.error.status_code, detail=result.error.message)
    return result.value
