from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError

from conduit.dependencies import (
    get_current_user_id,
    get_optional_user_id,
    get_user_service,
    unwrap,
)
from conduit.schemas import Profile, UserCreate, UserResponse
from conduit.services.user_service import UserService

router = APIRouter(prefix="/api/v1", tags=["users"])

@router.post("/users", status_code=201, response_model=UserResponse)
async def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    try:
        return unwrap(await service.create_user(data))
    except IntegrityError:
        # Lost a race with a concurrent insert of the same username/email.
        raise HTTPException(
            status_code=409,
            detail="A user with this username or email already exists",
        )

@router.get("/profiles/{username}", response_model=Profile)
async def get_profile(
    username: str,
    viewer_id: int | None = Depends(get_optional_user_id),
    service: UserService = Depends(get_user_service),
):
    return unwrap(await service.get_profile(username, viewer_id))

@router.post("/profiles/{username}/follow", response_model=Profile)
async def follow_user(
    username: str,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    return unwrap(await service.follow(username, user_id))

@router.delete("/profiles/{username}/follow", response_model=Profile)
async def unfollow_user(
    username: str,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    return unwrap(await service.unfollow(username, user_id))
