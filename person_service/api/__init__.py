"""API Layer — FastAPI routes, request decoding and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (except the root page)
    - Thin routes delegate to services
"""
