"""User Schemas - Pydantic models with field-level validation for API boundaries.

Invariants:
    - CreateUserRequest.name: 1-100 chars; email: valid address, at most 255 chars
    - UpdateUserRequest fields are optional; omitted (or null) means unchanged
    - UserResponse is the only user representation ever returned to clients
    - email is stored and echoed exactly as sent (validated, never normalized)
    - Timestamps serialize as RFC 3339 strings with an explicit UTC offset

Design Decisions:
    - Values are NOT stripped here: whitespace-only input is a business-rule
      failure (BAD_REQUEST), reported by core/enforce_user.py
    - pydantic reports every failing field at once, so all offending fields
      reach the client together
"""

from datetime import datetime, timezone
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255


def _check_email(v: str) -> str:
    """Format and length check; the address is kept exactly as sent."""
    if len(v) > EMAIL_MAX_LENGTH:
        raise ValueError(
            f"email must be at most {EMAIL_MAX_LENGTH} characters",
        )
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    return v


Email = Annotated[str, AfterValidator(_check_email)]


class CreateUserRequest(BaseModel):
    """User creation - both fields required."""
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    email: Email

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{"name": "Ada Lovelace", "email": "ada@example.com"}],
        },
    )


class UpdateUserRequest(BaseModel):
    """Partial update - only supplied fields are written."""
    name: str | None = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: Email | None = None

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"name": "Ada King"}]},
    )


class UserResponse(BaseModel):
    """Public-facing user data."""
    id: int
    name: str
    email: str
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, user) -> "UserResponse":
        """Map a users row to its response shape."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=to_rfc3339(user.created_at),
            updated_at=to_rfc3339(user.updated_at),
        )


def to_rfc3339(value: datetime) -> str:
    """Naive datetimes come back from SQLite; they were written as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
