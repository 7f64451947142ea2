"""User Routes - CRUD endpoints for the users resource.

Invariants:
    - Request bodies are shape-validated by pydantic before the handler runs
    - Handlers only pick status codes; rules and persistence live in UserService
    - Errors propagate to the global handlers (api/error_handlers.py)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.infrastructure.database import get_db
from userapi.schemas.common import ErrorResponse, ValidationErrorResponse
from userapi.schemas.user import (
    CreateUserRequest, UpdateUserRequest, UserResponse,
)
from userapi.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["Users"])

# ids outside the signed 64-bit column range are client errors
UserId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]

_BAD_REQUEST = {
    400: {
        "model": ValidationErrorResponse | ErrorResponse,
        "description": "Validation error or bad request",
    },
}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "User not found"}}


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
)
async def create_user(
    body: CreateUserRequest,
    service: UserService = Depends(get_user_service),
):
    """Create a user."""
    return await service.create_user(body)


@router.get("", response_model=list[UserResponse])
async def get_all_users(service: UserService = Depends(get_user_service)):
    """List all users, newest first."""
    return await service.get_all_users()


@router.get(
    "/{user_id}", response_model=UserResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
)
async def get_user(
    user_id: UserId, service: UserService = Depends(get_user_service),
):
    """Get one user by id."""
    return await service.get_user(user_id)


@router.put(
    "/{user_id}", response_model=UserResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
)
async def update_user(
    user_id: UserId,
    body: UpdateUserRequest,
    service: UserService = Depends(get_user_service),
):
    """Update the supplied fields of a user."""
    return await service.update_user(user_id, body)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def delete_user(
    user_id: UserId, service: UserService = Depends(get_user_service),
):
    """Delete a user."""
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
