from fastapi import APIRouter, Depends

from conduit.dependencies import (
    FeedParams,
    get_article_service,
    get_current_user_id,
    unwrap,
)
from conduit.schemas import (
    ArticleCreate,
    ArticleUpdate,
    ArticleView,
    CommentCreate,
    CommentView,
    CreateArticle,
    GetFeed,
    MultipleArticles,
    UpdateArticle,
)
from conduit.services.article_service import ArticleService

router = APIRouter(prefix="/api/v1/articles", tags=["articles"])

@router.post("", status_code=201, response_model=ArticleView)
async def create_article(
    data: ArticleCreate,
    user_id: int = Depends(get_current_user_id),
    service: ArticleService = Depends(get_article_service),
):
    return unwrap(await service.create_article(
        CreateArticle(user_id, data.title, data.description, data.body, data.tags)
    ))

# Registered before "/{slug}" so "feed" is not captured as a slug.
@router.get("/feed", response_model=MultipleArticles)
async def get_feed(
    params: FeedParams = Depends(),
    user_id: int = Depends(get_current_user_id),
    service: ArticleService = Depends(get_article_service),
):
    return await service.get_user_feed(GetFeed(user_id, params.limit, params.offset))

@router.get("/{slug}", response_model=ArticleView)
async def get_article(slug: str, service: ArticleService = Depends(get_article_service)):
    return unwrap(await service.get_article_by_slug(slug))

@router.put("/{slug}", response_model=ArticleView)
async def update_article(
    slug: str,
    data: ArticleUpdate,
    user_id: int = Depends(get_current_user_id),
    service: ArticleService = Depends(get_article_service),
):
    return unwrap(await service.update_article(
        UpdateArticle(slug, user_id, data.title, data.description, data.body)
    ))

@router.delete("/{slug}", status_code=204)
async def delete_article(
    slug: str,
    user_id: int = Depends(get_current_user_id),
    service: ArticleService = Depends(get_article_service),
):
    unwrap(await service.delete_article(slug, user_id))

@router.post("/{slug}/comments", status_code=201, response_model=CommentView)
async def add_comment(
    slug: str,
    data: CommentCreate,
    user_id: int = Depends(get_current_user_id),
    service: ArticleService = Depends(get_article_service),
):
    return unwrap(await service.insert_comment(slug, user_id, data.body))

@router.get("/{slug}/comments", response_model=list[CommentView])
async def list_comments(slug: str, service: ArticleService = Depends(get_article_service)):
    return await service.get_comments_for_slug(slug)

@router.delete("/{slug}/comments/{comment_id}", status_code=204)
async def delete_comment(
    slug: str,
    comment_id: int,
    user_id: int = Depends(get_current_user_id),
    service: ArticleService = Depends(get_article_service),
):
    unwrap(await service.delete_comment(slug, comment_id, user_id))

@router.post("/{slug}/favorite", response_model=ArticleView)
async def favorite_article(
    slug: str,
    user_id: int = Depends(get_current_user_id),
    service: ArticleService = Depends(get_article_service),
):
    return unwrap(await service.favorite_article(slug, user_id))

@router.delete("/{slug}/favorite", response_model=ArticleView)
async def unfavorite_article(
    slug: str,
    user_id: int = Depends(get_current_user_id),
    service: ArticleService = Depends(get_article_service),
):
    return unwrap(await service.unfavorite_article(slug, user_id))
