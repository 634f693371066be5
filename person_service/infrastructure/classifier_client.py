"""Classifier Client — async HTTP access to the age/gender/nationality inference APIs.

Invariants:
    - One GET per lookup: <service url>?name=<name>, JSON response body
    - Transport errors, non-2xx statuses and invalid JSON → EnrichmentServiceError
    - No retries; the timeout is the configured transport timeout
    - An injected httpx.AsyncClient is never closed by this class

Design Decisions:
    - One shared AsyncClient per process, created in the FastAPI lifespan
    - Service → URL mapping held here so core never sees URLs
"""

import logging
from typing import Any

import httpx

from person_service.core.domain_types import ClassifierService
from person_service.core.errors import EnrichmentServiceError

logger = logging.getLogger(__name__)


class ClassifierClient:
    """Implements the Classifier protocol over httpx."""

    def __init__(
        self,
        urls: dict[ClassifierService, str],
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = 5.0,
    ) -> None:
        missing = set(ClassifierService) - set(urls)
        if missing:
            raise ValueError(
                f"No URL configured for: {', '.join(sorted(s.value for s in missing))}",
            )
        self._urls = dict(urls)
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def fetch(self, service: ClassifierService, name: str) -> Any:
        """GET the service for one name and return the decoded JSON body."""
        url = self._urls[service]
        try:
            response = await self._client.get(url, params={"name": name})
        except httpx.HTTPError as e:
            logger.warning(
                f"Classifier request failed: {e!r}",
                extra={"service": service.value},
            )
            raise EnrichmentServiceError(
                service.value, f"request failed ({type(e).__name__})",
            ) from e

        if not response.is_success:
            logger.warning(
                f"Classifier returned HTTP {response.status_code}",
                extra={"service": service.value, "status_code": response.status_code},
            )
            raise EnrichmentServiceError(
                service.value, f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise EnrichmentServiceError(
                service.value, "response body is not valid JSON",
                status_code=response.status_code,
            ) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
