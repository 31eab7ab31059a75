"""
Article repository: article rows, their comments, and the feed query.

Design notes
------------
- Eager loading via ``joinedload`` (many-to-one: author) and
  ``selectinload`` (many-to-many: tags) keeps the feed at a fixed number of
  statements regardless of page size.  Favorite counts and the caller's
  favorited flags are resolved with two grouped queries over the page's ids.
- Methods flush but do not commit; the transaction boundary is owned by the
  ``get_db`` dependency.
- Deletion clears dependent rows explicitly so the behaviour is the same on
  backends that do not enforce ``ON DELETE CASCADE`` (SQLite in tests).
"""
from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from conduit.models import Article, Comment, Favorite, Follow, article_tags
from conduit.repositories.tag_repository import TagRepository
from conduit.schemas import ArticleView, Profile


class ArticleRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self._tags = TagRepository(db)

    # ------------------------------------------------------------------
    # Articles
    # ------------------------------------------------------------------

    async def exists(self, slug: str) -> bool:
        q = select(Article.id).where(Article.slug == slug)
        return (await self.db.execute(q)).first() is not None

    async def find_by_slug(self, slug: str) -> Article | None:
        result = await self.db.execute(select(Article).where(Article.slug == slug))
        return result.scalar_one_or_none()

    async def create(
        self,
        author_id: int,
        slug: str,
        title: str,
        description: str,
        body: str,
        created_at: datetime,
        updated_at: datetime,
        tags: Iterable[str],
    ) -> Article:
        """Insert the article and its tag associations in one flush."""
        article = Article(
            author_id=author_id,
            slug=slug,
            title=title,
            description=description,
            body=body,
            created_at=created_at,
            updated_at=updated_at,
        )
        tag_names = list(dict.fromkeys(tags))
        if tag_names:
            article.tags.extend(await self._tags.get_or_create(tag_names))

        self.db.add(article)
        await self.db.flush()
        return article

    async def update_article(
        self,
        slug: str,
        title: str | None = None,
        description: str | None = None,
        body: str | None = None,
    ) -> Article | None:
        """
        Apply a partial update; ``None`` leaves a field unchanged.

        The slug is never regenerated.  ``updated_at`` is refreshed on
        every call.
        """
        article = await self.find_by_slug(slug)
        if article is None:
            return None

        if title is not None:
            article.title = title
        if description is not None:
            article.description = description
        if body is not None:
            article.body = body
        article.updated_at = datetime.now(timezone.utc)

        await self.db.flush()
        return article

    async def delete_article(self, slug: str) -> bool:
        article_id = (
            await self.db.execute(select(Article.id).where(Article.slug == slug))
        ).scalar_one_or_none()
        if article_id is None:
            return False

        await self.db.execute(delete(Comment).where(Comment.article_id == article_id))
        await self.db.execute(delete(Favorite).where(Favorite.article_id == article_id))
        await self.db.execute(delete(article_tags).where(article_tags.c.article_id == article_id))
        await self.db.execute(delete(Article).where(Article.id == article_id))
        return True

    async def feed(self, user_id: int, limit: int, offset: int) -> list[ArticleView]:
        """
        Articles written by authors *user_id* follows, newest first.

        Four statements regardless of page size: the page itself (with the
        author joined), its tags, the favorite counts and the caller's own
        favorites.
        """
        followed = select(Follow.followee_id).where(Follow.follower_id == user_id)
        q = (
            select(Article)
            .where(Article.author_id.in_(followed))
            .options(joinedload(Article.author), selectinload(Article.tags))
            .order_by(Article.created_at.desc(), Article.id.desc())
            .offset(offset)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        articles = (await self.db.execute(q)).unique().scalars().all()
        if not articles:
            return []

        ids = [a.id for a in articles]
        counts_q = (
            select(Favorite.article_id, func.count())
            .where(Favorite.article_id.in_(ids))
            .group_by(Favorite.article_id)
        )
        counts = {article_id: n for article_id, n in (await self.db.execute(counts_q)).all()}

        favorited_q = select(Favorite.article_id).where(
            Favorite.user_id == user_id, Favorite.article_id.in_(ids)
        )
        favorited = set((await self.db.execute(favorited_q)).scalars().all())

        return [
            ArticleView(
                id=a.id,
                slug=a.slug,
                title=a.title,
                description=a.description,
                body=a.body,
                author=Profile(
                    username=a.author.username,
                    bio=a.author.bio,
                    image=a.author.image,
                    following=False,
                ),
                favorited=a.id in favorited,
                favorites_count=counts.get(a.id, 0),
                created_at=a.created_at,
                updated_at=a.updated_at,
                tags=sorted(t.name for t in a.tags),
            )
            for a in articles
        ]

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def create_comment(
        self, article_id: int, author_id: int, body: str, created_at: datetime
    ) -> Comment:
        comment = Comment(
            article_id=article_id,
            author_id=author_id,
            body=body,
            created_at=created_at,
        )
        self.db.add(comment)
        await self.db.flush()
        return comment

    async def find_comments(self, slug: str) -> list[Comment]:
        """Comments on the article at *slug*, oldest first; empty if no such article."""
        q = (
            select(Comment)
            .join(Article, Article.id == Comment.article_id)
            .where(Article.slug == slug)
            .order_by(Comment.created_at, Comment.id)
        )
        return list((await self.db.execute(q)).scalars().all())

    async def find_comment_author(self, comment_id: int) -> int | None:
        q = select(Comment.author_id).where(Comment.id == comment_id)
        return (await self.db.execute(q)).scalar_one_or_none()

    async def delete_comment(self, comment_id: int, user_id: int) -> None:
        await self.db.execute(
            delete(Comment).where(Comment.id == comment_id, Comment.author_id == user_id)
        )
