import pytest

from conduit.errors import SlugGenerationFailed
from conduit.result import Err, Ok
from conduit.services.slug import MAX_SLUG_LENGTH, SlugGenerator, slugify


# ---------------------------------------------------------------------------
# slugify
# ---------------------------------------------------------------------------

def test_slugify_special_characters():
    assert slugify("Hello World!") == "hello-world"
    assert slugify("  Spaces  Everywhere  ") == "spaces-everywhere"
    assert slugify("UPPER-case---dashes") == "upper-case-dashes"
    assert slugify("snake_case_title") == "snake-case-title"
    assert slugify("a & b @ c") == "a-b-c"


def test_slugify_empty_title_falls_back():
    assert slugify("!!!") == "article"
    assert slugify("") == "article"


def test_slugify_truncates_long_titles():
    slug = slugify("word " * 100)
    assert len(slug) <= MAX_SLUG_LENGTH
    assert not slug.endswith("-")


# ---------------------------------------------------------------------------
# SlugGenerator
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_generate_uses_plain_slug_when_free():
    async def always_free(candidate: str) -> bool:
        return True

    assert await SlugGenerator().generate("My Post", always_free) == Ok("my-post")


@pytest.mark.asyncio
async def test_generate_retries_until_unique():
    taken = {"my-post"}
    seen: list[str] = []

    async def is_unique(candidate: str) -> bool:
        seen.append(candidate)
        if len(seen) < 3:
            taken.add(candidate)
        return candidate not in taken

    result = await SlugGenerator(max_attempts=5).generate("My Post", is_unique)

    assert isinstance(result, Ok)
    assert len(seen) == 3
    assert seen[0] == "my-post"
    assert result.value == seen[-1]
    assert result.value.startswith("my-post-")


@pytest.mark.asyncio
async def test_generate_gives_up_after_max_attempts():
    calls = 0

    async def never_free(candidate: str) -> bool:
        nonlocal calls
        calls += 1
        return False

    result = await SlugGenerator(max_attempts=4).generate("Busy", never_free)

    assert result == Err(SlugGenerationFailed(title="Busy", attempts=4))
    assert calls == 4


def test_generator_rejects_non_positive_attempts():
    with pytest.raises(ValueError):
        SlugGenerator(max_attempts=0)
