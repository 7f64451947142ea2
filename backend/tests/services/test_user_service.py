"""User Service - orchestration of business rules, store calls, and response mapping.

Tests cover:
    - Business-rule failures raise BadRequestError before touching the store
    - NotFoundError propagates unchanged from the store
    - delete_user turns zero affected rows into NotFoundError
    - Responses are UserResponse, never ORM entities
"""

import pytest

from userapi.core.errors import BadRequestError, DatabaseError, NotFoundError
from userapi.schemas.user import (
    CreateUserRequest, UpdateUserRequest, UserResponse,
)
from userapi.services.user_service import UserService


@pytest.fixture
def service(test_db) -> UserService:
    return UserService(test_db)


async def test_create_user_returns_response(service):
    res = await service.create_user(
        CreateUserRequest(name="Ada", email="ada@example.com"),
    )
    assert isinstance(res, UserResponse)
    assert res.name == "Ada"
    assert res.created_at.endswith("+00:00")


async def test_create_user_with_blank_name_never_reaches_store(bare_db):
    # bare_db has no tables: a store call would raise DatabaseError instead
    with pytest.raises(BadRequestError, match="Name cannot be empty"):
        await UserService(bare_db).create_user(
            CreateUserRequest(name="  ", email="ada@example.com"),
        )


async def test_get_user_propagates_not_found(service):
    with pytest.raises(NotFoundError):
        await service.get_user(999999)


async def test_get_all_users_preserves_store_order(service):
    for name in ("A", "B", "C"):
        await service.create_user(
            CreateUserRequest(name=name, email=f"{name.lower()}@example.com"),
        )
    res = await service.get_all_users()
    assert [u.name for u in res] == ["C", "B", "A"]
    assert all(isinstance(u, UserResponse) for u in res)


async def test_update_user_writes_only_supplied_fields(service):
    created = await service.create_user(
        CreateUserRequest(name="Ada", email="ada@example.com"),
    )
    res = await service.update_user(
        created.id, UpdateUserRequest(email="ada@king.org"),
    )
    assert res.name == "Ada"
    assert res.email == "ada@king.org"


async def test_update_user_with_blank_name_is_bad_request(service):
    created = await service.create_user(
        CreateUserRequest(name="Ada", email="ada@example.com"),
    )
    with pytest.raises(BadRequestError):
        await service.update_user(created.id, UpdateUserRequest(name=" "))
    unchanged = await service.get_user(created.id)
    assert unchanged.name == "Ada"


async def test_update_missing_user_is_not_found(service):
    with pytest.raises(NotFoundError):
        await service.update_user(999999, UpdateUserRequest(name="Nobody"))


async def test_delete_user_then_get_is_not_found(service):
    created = await service.create_user(
        CreateUserRequest(name="Ada", email="ada@example.com"),
    )
    assert await service.delete_user(created.id) is None
    with pytest.raises(NotFoundError):
        await service.get_user(created.id)


async def test_delete_missing_user_carries_requested_id(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.delete_user(4242)
    assert exc_info.value.message == "User with id 4242 not found"


async def test_store_failure_propagates_as_database_error(bare_db):
    with pytest.raises(DatabaseError):
        await UserService(bare_db).get_all_users()
