"""
Article service: the article / comment / favorite workflow.

Design notes
------------
- Collaborators (slug generator and the four repositories) are passed to
  the constructor; nothing here reaches for module-level singletons.
- Every operation returns ``Ok(value)`` or ``Err(DomainError)``.  Only
  unexpected database faults raise.
- Every path that returns an ``ArticleView`` goes through
  ``_article_view`` so author, tags and favorite count are always
  re-read the same way.
- Read-check-write sequences are not locked; concurrent updates to the same
  article resolve as last-write-wins in the database.
"""
import logging
from datetime import datetime, timezone

from conduit.errors import (
    ArticleNotFound,
    CommentNotFound,
    DomainError,
    NotArticleAuthor,
    NotCommentAuthor,
    UserNotFound,
)
from conduit.models import Article
from conduit.repositories import (
    ArticleRepository,
    FavoriteRepository,
    TagRepository,
    UserRepository,
)
from conduit.result import Err, Ok, Result
from conduit.schemas import (
    ArticleView,
    CommentView,
    CreateArticle,
    GetFeed,
    MultipleArticles,
    Profile,
    UpdateArticle,
)
from conduit.services.slug import SlugGenerator

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ArticleService:
    def __init__(
        self,
        slug_generator: SlugGenerator,
        articles: ArticleRepository,
        users: UserRepository,
        tags: TagRepository,
        favorites: FavoriteRepository,
    ) -> None:
        self.slug_generator = slug_generator
        self.articles = articles
        self.users = users
        self.tags = tags
        self.favorites = favorites

    # ------------------------------------------------------------------
    # Articles
    # ------------------------------------------------------------------

    async def create_article(self, data: CreateArticle) -> Result[ArticleView, DomainError]:
        """
        Create an article under a freshly generated unique slug.

        The returned view is built from the input rather than re-read: a new
        article has no favorites and exactly the tags it was created with.
        """

        async def is_unique(candidate: str) -> bool:
            return not await self.articles.exists(candidate)

        slug_result = await self.slug_generator.generate(data.title, is_unique)
        if isinstance(slug_result, Err):
            return slug_result
        slug = slug_result.value

        tags = list(dict.fromkeys(data.tags))
        created_at = _now()
        article = await self.articles.create(
            data.user_id,
            slug,
            data.title,
            data.description,
            data.body,
            created_at,
            created_at,
            tags,
        )

        user = await self.users.select(data.user_id)
        if user is None:
            return Err(UserNotFound(data.user_id))

        logger.info("Article %r created by user %d", slug, data.user_id)
        return Ok(
            ArticleView(
                id=article.id,
                slug=slug,
                title=data.title,
                description=data.description,
                body=data.body,
                author=Profile(username=user.username, bio=user.bio, image=user.image),
                favorited=False,
                favorites_count=0,
                created_at=created_at,
                updated_at=created_at,
                tags=tags,
            )
        )

    async def get_article_by_slug(self, slug: str) -> Result[ArticleView, DomainError]:
        article = await self.articles.find_by_slug(slug)
        if article is None:
            return Err(ArticleNotFound(slug))
        # Anonymous-capable read: the caller's favorite is not resolved here.
        return await self._article_view(article, favorited=False)

    async def update_article(self, data: UpdateArticle) -> Result[ArticleView, DomainError]:
        article = await self.articles.find_by_slug(data.slug)
        if article is None:
            return Err(ArticleNotFound(data.slug))

        if article.author_id != data.user_id:
            logger.warning("User %d denied update of article %r", data.user_id, data.slug)
            return Err(NotArticleAuthor(data.user_id, data.slug))

        article_id = article.id
        updated = await self.articles.update_article(
            data.slug, data.title, data.description, data.body
        )
        if updated is None:
            return Err(ArticleNotFound(data.slug))

        favorited = await self.favorites.is_favorite(data.user_id, article_id)
        logger.info("Article %r updated by user %d", data.slug, data.user_id)
        return await self._article_view(updated, favorited)

    async def delete_article(self, slug: str, user_id: int) -> Result[None, DomainError]:
        article = await self.articles.find_by_slug(slug)
        if article is None:
            return Err(ArticleNotFound(slug))

        if article.author_id != user_id:
            logger.warning("User %d denied delete of article %r", user_id, slug)
            return Err(NotArticleAuthor(user_id, slug))

        if not await self.articles.delete_article(slug):
            return Err(ArticleNotFound(slug))

        logger.info("Article %r deleted by user %d", slug, user_id)
        return Ok(None)

    async def get_user_feed(self, data: GetFeed) -> MultipleArticles:
        articles = await self.articles.feed(data.user_id, data.limit, data.offset)
        return MultipleArticles(articles=articles, articles_count=len(articles))

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def insert_comment(
        self, slug: str, user_id: int, body: str
    ) -> Result[CommentView, DomainError]:
        article = await self.get_article_by_slug(slug)
        if isinstance(article, Err):
            return article

        comment = await self.articles.create_comment(
            article.value.id, user_id, body, _now()
        )
        logger.info("Comment %d added to %r by user %d", comment.id, slug, user_id)
        return Ok(CommentView.model_validate(comment))

    async def get_comments_for_slug(self, slug: str) -> list[CommentView]:
        comments = await self.articles.find_comments(slug)
        return [CommentView.model_validate(c) for c in comments]

    async def delete_comment(
        self, slug: str, comment_id: int, user_id: int
    ) -> Result[None, DomainError]:
        author_id = await self.articles.find_comment_author(comment_id)
        if author_id is None:
            return Err(CommentNotFound(comment_id))

        if author_id != user_id:
            logger.warning("User %d denied delete of comment %d", user_id, comment_id)
            return Err(NotCommentAuthor(user_id, comment_id))

        await self.articles.delete_comment(comment_id, user_id)
        logger.info("Comment %d on %r deleted by user %d", comment_id, slug, user_id)
        return Ok(None)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    async def favorite_article(self, slug: str, user_id: int) -> Result[ArticleView, DomainError]:
        article = await self.articles.find_by_slug(slug)
        if article is None:
            return Err(ArticleNotFound(slug))

        await self.favorites.favorite(user_id, article.id)
        logger.info("User %d favorited %r", user_id, slug)
        return await self._article_view(article, favorited=True)

    async def unfavorite_article(
        self, slug: str, user_id: int
    ) -> Result[ArticleView, DomainError]:
        article = await self.articles.find_by_slug(slug)
        if article is None:
            return Err(ArticleNotFound(slug))

        await self.favorites.unfavorite(user_id, article.id)
        logger.info("User %d unfavorited %r", user_id, slug)
        return await self._article_view(article, favorited=False)

    # ------------------------------------------------------------------
    # View assembly
    # ------------------------------------------------------------------

    async def _article_view(
        self, article: Article, favorited: bool
    ) -> Result[ArticleView, DomainError]:
        user = await self.users.select(article.author_id)
        if user is None:
            logger.warning("Author %d of article %r does not exist", article.author_id, article.slug)
            return Err(UserNotFound(article.author_id))

        tags = await self.tags.tags_of_article(article.id)
        favorites_count = await self.favorites.count(article.id)
        return Ok(
            ArticleView(
                id=article.id,
                slug=article.slug,
                title=article.title,
                description=article.description,
                body=article.body,
                author=Profile(username=user.username, bio=user.bio, image=user.image),
                favorited=favorited,
                favorites_count=favorites_count,
                created_at=article.created_at,
                updated_at=article.updated_at,
                tags=tags,
            )
        )
