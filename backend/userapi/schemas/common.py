"""Common Schemas - health and error bodies, used for OpenAPI documentation.

Invariants:
    - Shapes mirror exactly what core/errors.py and the health routes emit
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    message: str


class ErrorResponse(BaseModel):
    """Body for every non-validation error."""
    error: str
    message: str


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Body for VALIDATION_ERROR: one entry per offending field."""
    error: str = "VALIDATION_ERROR"
    errors: list[FieldErrorResponse]
