"""User API: thin routes delegating to UserService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_user_service
from app.application.dtos.user import UserCreate, UserPatch
from app.application.services.user_service import UserService
from app.schemas.user import (
    UserCreateRequest,
    UserDeleteResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(body: UserCreateRequest, service: UserServiceDep) -> UserResponse:
    """Create a user. 409 if the email is already registered."""
    user = await service.create(
        UserCreate(
            email=str(body.email),
            password=body.password,
            profile=body.profile_fields(),
        )
    )
    return UserResponse.from_record(user)


@router.get("", response_model=list[UserResponse])
async def list_users(
    service: UserServiceDep,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
) -> list[UserResponse]:
    """List users (paginated, newest first)."""
    users = await service.list_users(skip=skip, limit=limit)
    return [UserResponse.from_record(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserServiceDep) -> UserResponse:
    """Get user by id."""
    return UserResponse.from_record(await service.read(user_id))


@router.put("/{user_id}", response_model=UserResponse)
@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int, body: UserUpdateRequest, service: UserServiceDep
) -> UserResponse:
    """Update email, password and/or profile fields."""
    user = await service.update(
        user_id,
        UserPatch(
            email=str(body.email) if body.email is not None else None,
            password=body.password,
            profile=body.profile_fields() or None,
        ),
    )
    return UserResponse.from_record(user)


@router.delete("/{user_id}", response_model=UserDeleteResponse)
async def delete_user(user_id: int, service: UserServiceDep) -> UserDeleteResponse:
    """Delete user; deleted is False when it did not exist."""
    return UserDeleteResponse(deleted=await service.delete(user_id))
