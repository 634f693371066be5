"""ORM Models — SQLAlchemy declarative models for the person store.

Invariants:
    - All models inherit from Base (db/base.py)
    - Importing this package registers every table on Base.metadata
"""

from person_service.models.person import Person  # noqa: F401
