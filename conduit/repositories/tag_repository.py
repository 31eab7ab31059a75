from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from conduit.models import Tag, article_tags


class TagRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def tags_of_article(self, article_id: int) -> list[str]:
        """Tag names attached to *article_id*, alphabetically."""
        q = (
            select(Tag.name)
            .join(article_tags, article_tags.c.tag_id == Tag.id)
            .where(article_tags.c.article_id == article_id)
            .order_by(Tag.name)
        )
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def get_or_create(self, names: Iterable[str]) -> list[Tag]:
        """
        Return Tag rows for each name in *names*, creating any that do not
        yet exist.  Inserts are flushed within the caller's transaction.
        """
        tags: list[Tag] = []
        for name in names:
            result = await self.db.execute(select(Tag).where(Tag.name == name))
            tag = result.scalar_one_or_none()
            if tag is None:
                tag = Tag(name=name)
                self.db.add(tag)
                await self.db.flush()
            tags.append(tag)
        return tags

    async def all_tags(self) -> list[str]:
        result = await self.db.execute(select(Tag.name).order_by(Tag.name))
        return list(result.scalars().all())
