from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from conduit.models import Follow, User


class UserRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def select(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def select_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def is_taken(self, username: str, email: str) -> bool:
        q = select(User.id).where(or_(User.username == username, User.email == email))
        return (await self.db.execute(q)).first() is not None

    async def create(
        self,
        username: str,
        email: str,
        bio: str | None = None,
        image: str | None = None,
    ) -> User:
        """
        Insert a user and flush so the id is assigned.

        Username and email uniqueness are enforced by the database; the
        resulting ``IntegrityError`` is left to the caller.
        """
        user = User(username=username, email=email, bio=bio, image=image)
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user, ["created_at"])
        return user

    async def is_following(self, follower_id: int, followee_id: int) -> bool:
        q = select(Follow.follower_id).where(
            Follow.follower_id == follower_id, Follow.followee_id == followee_id
        )
        return (await self.db.execute(q)).first() is not None

    async def follow(self, follower_id: int, followee_id: int) -> None:
        if await self.is_following(follower_id, followee_id):
            return
        self.db.add(Follow(follower_id=follower_id, followee_id=followee_id))
        await self.db.flush()

    async def unfollow(self, follower_id: int, followee_id: int) -> None:
        await self.db.execute(
            delete(Follow).where(
                Follow.follower_id == follower_id, Follow.followee_id == followee_id
            )
        )
