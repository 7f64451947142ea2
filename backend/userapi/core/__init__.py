"""Core - pure domain logic: error taxonomy and business rules.

Invariants:
    - Nothing in core/ performs IO, touches the database, or imports FastAPI
"""
