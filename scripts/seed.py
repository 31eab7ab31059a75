"""Populate a development database with users, follows, articles, comments and favorites.

Articles are created through ``ArticleService`` so slugs, tags and
timestamps go through the same path as API traffic.
"""
import argparse
import asyncio
import random
import time

from conduit.database import Base, async_session, engine
from conduit.repositories import (
    ArticleRepository,
    FavoriteRepository,
    TagRepository,
    UserRepository,
)
from conduit.result import Err
from conduit.schemas import CreateArticle
from conduit.services.article_service import ArticleService
from conduit.services.slug import SlugGenerator

TAGS = ["python", "fastapi", "postgresql", "sqlalchemy", "docker", "kubernetes",
        "react", "typescript", "aws", "devops", "testing", "performance",
        "security", "microservices", "graphql", "rest-api"]


async def seed(small: bool = False):
    num_users = 10 if small else 50
    num_articles = 100 if small else 2000
    max_comments = 2 if small else 5

    print(f"Seeding: {num_users} users, {num_articles} articles")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        users_repo = UserRepository(session)
        service = ArticleService(
            slug_generator=SlugGenerator(),
            articles=ArticleRepository(session),
            users=users_repo,
            tags=TagRepository(session),
            favorites=FavoriteRepository(session),
        )

        users = []
        for i in range(num_users):
            users.append(await users_repo.create(
                username=f"user_{i:04d}",
                email=f"user_{i:04d}@example.com",
                bio=f"I am test user number {i}. I write about technology.",
            ))
        print(f"  Created {len(users)} users")

        follows = 0
        for user in users:
            for other in random.sample(users, k=min(5, num_users)):
                if other.id != user.id:
                    await users_repo.follow(user.id, other.id)
                    follows += 1
        print(f"  Created {follows} follows")

        total_comments = 0
        total_favorites = 0
        for i in range(num_articles):
            author = random.choice(users)
            topic = random.choice(TAGS)
            result = await service.create_article(CreateArticle(
                user_id=author.id,
                title=f"How to optimize {topic} applications, part {i}",
                description=f"A guide to running {topic} in production.",
                body=f"This is the full body of article {i}. " * 20,
                tags=random.sample(TAGS, k=random.randint(1, 4)),
            ))
            if isinstance(result, Err):
                print(f"  Skipped article {i}: {result.error.message}")
                continue
            slug = result.value.slug

            for _ in range(random.randint(0, max_comments)):
                await service.insert_comment(
                    slug, random.choice(users).id, "Great article! Very helpful."
                )
                total_comments += 1
            for fan in random.sample(users, k=random.randint(0, 3)):
                await service.favorite_article(slug, fan.id)
                total_favorites += 1

            if (i + 1) % 500 == 0:
                await session.flush()
                print(f"  {i + 1} articles created")

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {num_users}")
    print(f"  Articles: {num_articles}")
    print(f"  Comments: {total_comments}")
    print(f"  Favorites: ~{total_favorites}")


def main():
    parser = argparse.ArgumentParser(description="Seed the Conduit database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (100 articles)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
