"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the pure functions that use PersonLike (apply_patch) are never async
"""

from typing import TYPE_CHECKING, Any, Protocol

from person_service.core.domain_types import ClassifierService, PersonId

if TYPE_CHECKING:
    from person_service.core.query_builder import QuerySpec


class PersonLike(Protocol):
    """Structural contract for Person records passed between core and store.

    Avoids coupling core functions to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: int | None
    name: str
    surname: str
    patronymic: str
    gender: str
    age: int
    nationality: str


class PersonRepository(Protocol):
    """Contract for Person persistence — implemented by shell."""
    async def create(self, person: PersonLike) -> PersonLike: ...
    async def get_by_id(self, person_id: PersonId) -> PersonLike: ...
    async def execute(self, spec: "QuerySpec") -> list[PersonLike]: ...
    async def save(self, person: PersonLike) -> None: ...
    async def delete_by_id(self, person_id: PersonId) -> None: ...


class Classifier(Protocol):
    """Contract for one-name classifier lookups — implemented by shell.

    fetch() returns the decoded JSON body or raises EnrichmentServiceError.
    """
    async def fetch(self, service: ClassifierService, name: str) -> Any: ...
