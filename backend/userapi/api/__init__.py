"""API Layer - FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON bodies, except DELETE's empty 204
    - Routes are thin: parse, delegate to services, choose the status code
"""
