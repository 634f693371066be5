"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas describe the API boundary; models/ describe persistence
"""
