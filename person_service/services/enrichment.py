"""Enrichment Orchestrator — age, gender and nationality for a name, all or nothing.

Invariants:
    - Exactly three lookups per enrich() call, each keyed solely by name
    - Any single failure (transport, status, malformed body) fails the whole
      enrichment with that one EnrichmentServiceError; nothing partial is returned
    - No retries, no state retained between calls
    - Does not validate name; callers reject empty names first

Design Decisions:
    - concurrent=True runs the lookups as asyncio tasks; the first failure
      cancels the remaining tasks before it is re-raised
    - concurrent=False issues them in order age → gender → nationality and
      stops at the first failure
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from person_service.core.domain_types import ClassifierService, EnrichedAttributes
from person_service.core.enrichment_parsing import (
    parse_age, parse_gender, parse_nationality,
)
from person_service.core.repository_protocols import Classifier

logger = logging.getLogger(__name__)

_PARSERS: dict[ClassifierService, Callable[[Any], Any]] = {
    ClassifierService.AGE: parse_age,
    ClassifierService.GENDER: parse_gender,
    ClassifierService.NATIONALITY: parse_nationality,
}


class EnrichmentOrchestrator:
    """Fans one name out to the three classifiers and assembles the result."""

    def __init__(self, classifier: Classifier, concurrent: bool = True):
        self.classifier = classifier
        self.concurrent = concurrent

    async def enrich(self, name: str) -> EnrichedAttributes:
        if self.concurrent:
            values = await self._gather_all_or_nothing(name)
        else:
            values = [await self._lookup(service, name) for service in _PARSERS]
        age, gender, nationality = values
        attributes = EnrichedAttributes(
            age=age, gender=gender, nationality=nationality,
        )
        logger.info(
            "Enriched name",
            extra={"age": age, "gender": gender, "nationality": nationality},
        )
        return attributes

    async def _lookup(self, service: ClassifierService, name: str) -> Any:
        payload = await self.classifier.fetch(service, name)
        return _PARSERS[service](payload)

    async def _gather_all_or_nothing(self, name: str) -> list[Any]:
        tasks = [
            asyncio.create_task(self._lookup(service, name))
            for service in _PARSERS
        ]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
            # Every finished task's exception is retrieved, not only the one raised
            errors = [
                task.exception() for task in tasks
                if task.done() and not task.cancelled()
            ]
            failure = next((e for e in errors if e is not None), None)
            if failure is not None:
                raise failure
            return [task.result() for task in tasks]
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
