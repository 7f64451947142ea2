"""User ORM - the single persisted entity, mapped to the `users` table.

Invariants:
    - id is an auto-increment integer primary key, assigned by the store
    - name is 1-100 chars, email at most 255 chars (enforced at the API boundary)
    - created_at/updated_at are set by the data access layer, never by clients
    - email carries no uniqueness constraint

Design Decisions:
    - Integer primary key (not UUID): matches the public `/api/users/{id}` contract
    - No column defaults: timestamps are written explicitly by user_store so
      created_at and updated_at share one clock reading on insert
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from userapi.db.base import Base


class User(Base):
    """A user row. Never serialized directly - see schemas.user.UserResponse."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"
