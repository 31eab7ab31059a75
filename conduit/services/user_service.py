"""
User service: account creation, public profiles and follow relationships.

Follows only matter to the article feed; profiles returned here resolve
``following`` for the viewing user, unlike the article views which always
report ``False``.
"""
import logging

from conduit.errors import DomainError, UsernameTaken, UserNotFound
from conduit.repositories import UserRepository
from conduit.result import Err, Ok, Result
from conduit.schemas import Profile, UserCreate, UserResponse

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: UserRepository) -> None:
        self.users = users

    async def create_user(self, data: UserCreate) -> Result[UserResponse, DomainError]:
        """
        Create a user, reporting a username or email clash as ``UsernameTaken``.

        The check-then-insert is not atomic; a concurrent insert surfaces as
        ``IntegrityError`` from the unique constraints, which the router maps
        to the same 409.
        """
        if await self.users.is_taken(data.username, data.email):
            logger.info("Rejected duplicate user %r", data.username)
            return Err(UsernameTaken(data.username))

        user = await self.users.create(data.username, data.email, data.bio, data.image)
        logger.info("User %r created with id %d", user.username, user.id)
        return Ok(UserResponse.model_validate(user))

    async def get_profile(
        self, username: str, viewer_id: int | None = None
    ) -> Result[Profile, DomainError]:
        user = await self.users.select_by_username(username)
        if user is None:
            return Err(UserNotFound(username))

        following = False
        if viewer_id is not None:
            following = await self.users.is_following(viewer_id, user.id)
        return Ok(Profile(username=user.username, bio=user.bio, image=user.image, following=following))

    async def follow(self, username: str, follower_id: int) -> Result[Profile, DomainError]:
        user = await self.users.select_by_username(username)
        if user is None:
            return Err(UserNotFound(username))

        # Following yourself is silently ignored.
        if user.id != follower_id:
            await self.users.follow(follower_id, user.id)
            logger.info("User %d now follows %r", follower_id, username)
        return await self.get_profile(username, follower_id)

    async def unfollow(self, username: str, follower_id: int) -> Result[Profile, DomainError]:
        user = await self.users.select_by_username(username)
        if user is None:
            return Err(UserNotFound(username))

        await self.users.unfollow(follower_id, user.id)
        logger.info("User %d unfollowed %r", follower_id, username)
        return await self.get_profile(username, follower_id)
