# Repositories package.
#
# One class per table family, each wrapping the request's AsyncSession:
#
#   ArticleRepository   articles, their comments, and the follow-based feed
#   UserRepository      users and follow relationships
#   TagRepository       tag names and article <-> tag association
#   FavoriteRepository  (user, article) favorite membership
#
# Repositories flush but never commit, and report missing rows as None /
# False.  Turning those into domain errors is the service layer's job.
from conduit.repositories.article_repository import ArticleRepository
from conduit.repositories.favorite_repository import FavoriteRepository
from conduit.repositories.tag_repository import TagRepository
from conduit.repositories.user_repository import UserRepository

__all__ = [
    "ArticleRepository",
    "FavoriteRepository",
    "TagRepository",
    "UserRepository",
]
