from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from conduit.database import get_db
from conduit.repositories import TagRepository
from conduit.schemas import TagList

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])

@router.get("", response_model=TagList)
async def list_tags(db: AsyncSession = Depends(get_db)):
    return TagList(tags=await TagRepository(db).all_tags())
