"""Database Package - declarative base shared by all ORM models."""
