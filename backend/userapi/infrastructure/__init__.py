"""Infrastructure - database pool, data access, and logging setup.

Invariants:
    - Everything that performs IO lives here or in api/
"""
