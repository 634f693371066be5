"""Person Service — create, retrieve, update and delete over an explicitly passed store.

Invariants:
    - Every check on the decoded key-value input runs before any store or network call
    - create: name and surname required; enrichment failure persists nothing
    - retrieve: at least one filter; bounded page/limit
    - update: id required; at least one patch field; empty input leaves fields unchanged
    - delete: id required; unknown id → ResourceNotFoundError

Design Decisions:
    - Built per request around that request's repository (no process-wide store handle)
    - Follows impureim sandwich: pure parse/validate → IO → pure patch → IO
"""

import logging
from collections.abc import Mapping

from person_service.core.domain_types import PersonId
from person_service.core.errors import NoFilterError
from person_service.core.form_fields import clean, parse_positive, require_fields
from person_service.core.person_patch import PersonPatch, apply_patch
from person_service.core.query_builder import build_query_from_values
from person_service.core.repository_protocols import PersonRepository
from person_service.models.person import Person
from person_service.services.enrichment import EnrichmentOrchestrator

logger = logging.getLogger(__name__)


def _parse_id(values: Mapping[str, str]) -> PersonId:
    require_fields(values, "id")
    return PersonId(parse_positive("id", values["id"]))


class PersonService:
    """Request-scoped operations on Person records."""

    def __init__(
        self,
        repository: PersonRepository,
        enricher: EnrichmentOrchestrator,
        max_limit: int | None = None,
    ):
        self.repository = repository
        self.enricher = enricher
        self.max_limit = max_limit

    async def create(self, values: Mapping[str, str]) -> Person:
        """Enrich by name and persist. Nothing is stored if enrichment fails."""
        # ── PURE: presence checks ──
        require_fields(values, "name", "surname")
        name = clean(values.get("name"))

        # ── IMPURE: enrichment, then persistence ──
        attributes = await self.enricher.enrich(name)
        person = Person(
            name=name,
            surname=clean(values.get("surname")),
            patronymic=clean(values.get("patronymic")),
            gender=attributes.gender,
            age=attributes.age,
            nationality=attributes.nationality,
        )
        person = await self.repository.create(person)
        logger.info("Person created", extra={"person_id": person.id})
        return person

    async def retrieve(self, values: Mapping[str, str]) -> list[Person]:
        spec = build_query_from_values(values, self.max_limit)
        return await self.repository.execute(spec)

    async def update(self, values: Mapping[str, str]) -> Person:
        """Sparse patch: only supplied, non-empty fields are overwritten."""
        person_id = _parse_id(values)
        patch = PersonPatch.from_values(values)
        if patch.is_empty():
            raise NoFilterError()

        person = await self.repository.get_by_id(person_id)
        changed = apply_patch(person, patch)
        if changed:
            await self.repository.save(person)
        logger.info(
            f"Person updated ({', '.join(changed) or 'no changes'})",
            extra={"person_id": person_id},
        )
        return person

    async def delete(self, values: Mapping[str, str]) -> None:
        person_id = _parse_id(values)
        await self.repository.delete_by_id(person_id)
        logger.info("Person deleted", extra={"person_id": person_id})
