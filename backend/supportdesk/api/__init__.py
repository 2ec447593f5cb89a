"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the {status, data, message} envelope

Design Decisions:
    - Thin routes delegate to services
"""
