"""User Store - parameterized SQL against the `users` table.

Invariants:
    - Every user-supplied value is a bound parameter; only column names vary
    - Store failures leave this module already classified: "no rows" becomes
      NotFoundError, everything else DatabaseError (after rollback)
    - Writes commit before returning; reads never commit
    - delete_user reports the affected row count and never raises NotFoundError

Design Decisions:
    - Core insert/update/delete over ORM unit-of-work: one statement per write
    - create_user fetches by the generated primary key; the newest-row-for-email
      re-query only runs when a backend yields no key
    - Timestamps come from one application clock in UTC so updated_at >= created_at
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.core.errors import DatabaseError, NotFoundError
from userapi.models.user import User

logger = logging.getLogger(__name__)
_users = User.__table__


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@asynccontextmanager
async def _classify_errors(
    db: AsyncSession, operation: str, user_id: int | None = None,
) -> AsyncGenerator[None, None]:
    """Reclassify store exceptions into the API error taxonomy."""
    try:
        yield
    except NoResultFound:
        raise (
            NotFoundError.for_user(user_id) if user_id is not None
            else NotFoundError()
        )
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"DB {operation} error: {e}", extra={"operation": operation},
        )
        # driver message without the SQL echo when the DBAPI error is available
        raise DatabaseError(str(getattr(e, "orig", None) or e), operation) from e


def build_update_assignments(
    name: str | None, email: str | None, now: datetime,
) -> list[tuple[str, object]]:
    """Ordered (column, value) pairs for a partial update.

    Only supplied fields are included; updated_at is always appended last.
    """
    assignments: list[tuple[str, object]] = []
    if name is not None:
        assignments.append(("name", name))
    if email is not None:
        assignments.append(("email", email))
    assignments.append(("updated_at", now))
    return assignments


async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
    """Fetch one row. NotFoundError when absent."""
    async with _classify_errors(db, "select", user_id):
        result = await db.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one()


async def _get_latest_by_email(db: AsyncSession, email: str) -> User:
    async with _classify_errors(db, "select"):
        result = await db.execute(
            select(User)
            .where(User.email == email)
            .order_by(User.id.desc())
            .limit(1)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one()


async def create_user(db: AsyncSession, name: str, email: str) -> User:
    """Insert a row with server-set timestamps and return it."""
    now = _utcnow()
    async with _classify_errors(db, "insert"):
        result = await db.execute(
            insert(_users).values(
                name=name, email=email, created_at=now, updated_at=now,
            ),
        )
        primary_key = result.inserted_primary_key
        await db.commit()

    new_id = primary_key[0] if primary_key else None
    if new_id is None:
        logger.warning("Insert returned no primary key, re-querying by email")
        user = await _get_latest_by_email(db, email)
    else:
        user = await get_user_by_id(db, new_id)
    logger.info(f"Created user {user.id}", extra={"user_id": user.id})
    return user


async def get_all_users(db: AsyncSession) -> list[User]:
    """All rows, newest first. An empty table yields an empty list."""
    async with _classify_errors(db, "select"):
        result = await db.execute(
            select(User).order_by(User.created_at.desc(), User.id.desc()),
        )
        return list(result.scalars().all())


async def update_user(
    db: AsyncSession,
    user_id: int,
    name: str | None = None,
    email: str | None = None,
) -> User:
    """Write only the supplied columns plus updated_at, then re-fetch by id."""
    assignments = build_update_assignments(name, email, _utcnow())
    async with _classify_errors(db, "update", user_id):
        await db.execute(
            update(_users)
            .where(_users.c.id == user_id)
            .values(dict(assignments)),
        )
        await db.commit()

    user = await get_user_by_id(db, user_id)
    logger.info(
        f"Updated user {user_id}: {', '.join(c for c, _ in assignments)}",
        extra={"user_id": user_id},
    )
    return user


async def delete_user(db: AsyncSession, user_id: int) -> int:
    """Delete by id and return the affected row count (0 or 1)."""
    async with _classify_errors(db, "delete", user_id):
        result = await db.execute(
            delete(_users).where(_users.c.id == user_id),
        )
        deleted = result.rowcount
        await db.commit()
    if deleted:
        logger.info(f"Deleted user {user_id}", extra={"user_id": user_id})
    return deleted
