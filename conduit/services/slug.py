import logging
import re
import secrets
from collections.abc import Awaitable, Callable

from conduit.errors import SlugGenerationFailed
from conduit.result import Err, Ok, Result

logger = logging.getLogger(__name__)

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_SPACE_RE = re.compile(r"[\s_]+")
_SLUG_DASH_RE = re.compile(r"-+")

MAX_SLUG_LENGTH = 200
FALLBACK_SLUG = "article"

UniquenessCheck = Callable[[str], Awaitable[bool]]


def slugify(text: str) -> str:
    """Return a URL-safe, lowercase slug derived from *text*."""
    text = _SLUG_STRIP_RE.sub("", text.lower().strip())
    text = _SLUG_SPACE_RE.sub("-", text)
    text = _SLUG_DASH_RE.sub("-", text).strip("-")
    return text[:MAX_SLUG_LENGTH].rstrip("-") or FALLBACK_SLUG


class SlugGenerator:
    """
    Produces a slug for a title that satisfies an async uniqueness check.

    The first candidate is the plain slugified title; every following one
    appends a short random hex suffix.  After ``max_attempts`` rejected
    candidates generation fails with ``SlugGenerationFailed``.
    """

    def __init__(self, max_attempts: int = 10, suffix_bytes: int = 3) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.suffix_bytes = suffix_bytes

    def candidates(self, title: str):
        base = slugify(title)
        yield base
        while True:
            yield f"{base}-{secrets.token_hex(self.suffix_bytes)}"

    async def generate(
        self, title: str, is_unique: UniquenessCheck
    ) -> Result[str, SlugGenerationFailed]:
        for attempt, candidate in enumerate(self.candidates(title), start=1):
            if await is_unique(candidate):
                return Ok(candidate)
            logger.debug("Slug %r taken (attempt %d/%d)", candidate, attempt, self.max_attempts)
            if attempt >= self.max_attempts:
                break

        logger.warning("Slug generation for %r gave up after %d attempts", title, self.max_attempts)
        return Err(SlugGenerationFailed(title=title, attempts=self.max_attempts))
