"""User Business Rules - checks applied after request-shape validation.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Raise BadRequestError on violation, return None on success
    - Only supplied fields are checked (None means "not supplied")

Design Decisions:
    - Shape rules (length, email format) live in schemas/user.py; this module
      only holds rules pydantic cannot express alone, such as whitespace-only values
"""

from userapi.core.errors import BadRequestError


def check_not_blank(value: str | None, label: str) -> None:
    """A supplied value must contain something other than whitespace."""
    if value is not None and not value.strip():
        raise BadRequestError(f"{label} cannot be empty")


def check_create_fields(name: str, email: str) -> None:
    """Both fields are required on create."""
    check_not_blank(name, "Name")
    check_not_blank(email, "Email")


def check_update_fields(name: str | None, email: str | None) -> None:
    """Partial update: omitted fields pass, supplied ones must not be blank."""
    check_not_blank(name, "Name")
    check_not_blank(email, "Email")
