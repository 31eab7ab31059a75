from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from conduit.models import Favorite


class FavoriteRepository:
    """
    (user, article) favorite membership.

    Both ``favorite`` and ``unfavorite`` are idempotent: repeating either is
    a no-op, so ``count`` never double-counts a user.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def is_favorite(self, user_id: int, article_id: int) -> bool:
        q = select(Favorite.user_id).where(
            Favorite.user_id == user_id, Favorite.article_id == article_id
        )
        result = await self.db.execute(q)
        return result.first() is not None

    async def favorite(self, user_id: int, article_id: int) -> None:
        if await self.is_favorite(user_id, article_id):
            return
        self.db.add(Favorite(user_id=user_id, article_id=article_id))
        await self.db.flush()

    async def unfavorite(self, user_id: int, article_id: int) -> None:
        await self.db.execute(
            delete(Favorite).where(
                Favorite.user_id == user_id, Favorite.article_id == article_id
            )
        )

    async def count(self, article_id: int) -> int:
        q = select(func.count()).select_from(Favorite).where(Favorite.article_id == article_id)
        return (await self.db.execute(q)).scalar_one()
