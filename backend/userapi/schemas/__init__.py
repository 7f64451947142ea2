"""Schemas - Pydantic request/response shapes for the API boundary."""
