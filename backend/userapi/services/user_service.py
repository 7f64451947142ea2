"""User Service - applies business rules, calls the store, maps rows to responses.

Invariants:
    - Business rules run before any store call (a rejected request never touches the DB)
    - Store errors arrive already classified and propagate unchanged
    - Only UserResponse leaves this layer, never the ORM entity
    - delete_user turns a zero affected-row count into NotFoundError
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from userapi.core.enforce_user import check_create_fields, check_update_fields
from userapi.core.errors import NotFoundError
from userapi.infrastructure import user_store
from userapi.schemas.user import (
    CreateUserRequest, UpdateUserRequest, UserResponse,
)

logger = logging.getLogger(__name__)


class UserService:
    """CRUD operations on users, bound to one request's DB session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(self, request: CreateUserRequest) -> UserResponse:
        check_create_fields(request.name, request.email)
        user = await user_store.create_user(
            self.db, request.name, request.email,
        )
        return UserResponse.from_entity(user)

    async def get_user(self, user_id: int) -> UserResponse:
        user = await user_store.get_user_by_id(self.db, user_id)
        return UserResponse.from_entity(user)

    async def get_all_users(self) -> list[UserResponse]:
        users = await user_store.get_all_users(self.db)
        return [UserResponse.from_entity(u) for u in users]

    async def update_user(
        self, user_id: int, request: UpdateUserRequest,
    ) -> UserResponse:
        """Partial update: fields left out of the request stay unchanged."""
        check_update_fields(request.name, request.email)
        user = await user_store.update_user(
            self.db, user_id, name=request.name, email=request.email,
        )
        return UserResponse.from_entity(user)

    async def delete_user(self, user_id: int) -> None:
        deleted = await user_store.delete_user(self.db, user_id)
        if deleted == 0:
            raise NotFoundError.for_user(user_id)
