"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PersonId wraps the store-assigned integer identifier
    - PersonField lists the six optional fields in canonical order
    - EnrichedAttributes is immutable once assembled

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and compare equal to their raw form values
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PersonId = NewType("PersonId", int)


# ─── Enums ───────────────────────────────────────────────────────

class PersonField(str, Enum):
    """Optional Person fields accepted as filters and as patch keys."""
    NAME = "name"
    SURNAME = "surname"
    PATRONYMIC = "patronymic"
    GENDER = "gender"
    AGE = "age"
    NATIONALITY = "nationality"


class ClassifierService(str, Enum):
    """The three external classifiers consulted during enrichment."""
    AGE = "age"
    GENDER = "gender"
    NATIONALITY = "nationality"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class EnrichedAttributes:
    """Attributes inferred from a name. age 0 and empty strings mean unknown."""
    age: int
    gender: str
    nationality: str
