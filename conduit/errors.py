"""
Closed set of domain errors produced by the service layer.

Each error carries the HTTP status the router layer reports it with, and a
human-readable ``message``.
"""
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class DomainError:
    status_code: ClassVar[int] = 400

    @property
    def message(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class ArticleNotFound(DomainError):
    slug: str
    status_code: ClassVar[int] = 404

    @property
    def message(self) -> str:
        return f"Article with slug {self.slug!r} not found"


@dataclass(frozen=True)
class CommentNotFound(DomainError):
    comment_id: int
    status_code: ClassVar[int] = 404

    @property
    def message(self) -> str:
        return f"Comment {self.comment_id} not found"


@dataclass(frozen=True)
class UserNotFound(DomainError):
    # Either a numeric id or a username, depending on how it was addressed.
    user: int | str
    status_code: ClassVar[int] = 404

    @property
    def message(self) -> str:
        return f"User {self.user!r} not found"


@dataclass(frozen=True)
class NotArticleAuthor(DomainError):
    user_id: int
    slug: str
    status_code: ClassVar[int] = 403

    @property
    def message(self) -> str:
        return f"User {self.user_id} is not the author of article {self.slug!r}"


@dataclass(frozen=True)
class NotCommentAuthor(DomainError):
    user_id: int
    comment_id: int
    status_code: ClassVar[int] = 403

    @property
    def message(self) -> str:
        return f"User {self.user_id} is not the author of comment {self.comment_id}"


@dataclass(frozen=True)
class SlugGenerationFailed(DomainError):
    title: str
    attempts: int
    status_code: ClassVar[int] = 409

    @property
    def message(self) -> str:
        return f"Could not find a free slug for {self.title!r} after {self.attempts} attempts"


@dataclass(frozen=True)
class UsernameTaken(DomainError):
    username: str
    status_code: ClassVar[int] = 409

    @property
    def message(self) -> str:
        return f"A user with username or email of {self.username!r} already exists"
