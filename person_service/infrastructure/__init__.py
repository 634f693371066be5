"""Infrastructure Layer — database, outbound HTTP clients and logging.

Invariants:
    - All external calls wrapped with timeout/error mapping
    - Library exceptions (SQLAlchemy, httpx) never escape; they become PersonServiceError
"""
