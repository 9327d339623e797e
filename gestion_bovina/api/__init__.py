"""API Layer — FastAPI routes, auth dependency and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses, errors included

Design Decisions:
    - Thin routes delegate to services; only error_handlers.py maps errors to status codes
"""
