"""Enrichment Parsing — pure extraction of attributes from classifier JSON payloads.

Invariants:
    - Absent or null attribute → "unknown" (age 0, empty string), never an error
    - Wrongly-typed attribute or non-object payload → EnrichmentServiceError
    - Nationality is the head of the service's candidate list; no re-ranking

Payload shapes:
    age:         {"age": <int|null>, ...}
    gender:      {"gender": "<str>"|null, ...}
    nationality: {"country": [{"country_id": "<code>", "probability": <float>}, ...], ...}
"""

from typing import Any

from person_service.core.domain_types import ClassifierService
from person_service.core.errors import EnrichmentServiceError


def _require_object(service: ClassifierService, payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise EnrichmentServiceError(
            service.value, f"expected a JSON object, got {type(payload).__name__}",
        )
    return payload


def parse_age(payload: Any) -> int:
    body = _require_object(ClassifierService.AGE, payload)
    age = body.get("age")
    if age is None:
        return 0
    # bool is an int subclass; reject it explicitly
    if isinstance(age, bool) or not isinstance(age, int):
        raise EnrichmentServiceError(
            ClassifierService.AGE.value, f"'age' is not an integer: {age!r}",
        )
    if age < 0:
        raise EnrichmentServiceError(
            ClassifierService.AGE.value, f"'age' is negative: {age}",
        )
    return age


def parse_gender(payload: Any) -> str:
    body = _require_object(ClassifierService.GENDER, payload)
    gender = body.get("gender")
    if gender is None:
        return ""
    if not isinstance(gender, str):
        raise EnrichmentServiceError(
            ClassifierService.GENDER.value, f"'gender' is not a string: {gender!r}",
        )
    return gender


def parse_nationality(payload: Any) -> str:
    """Return the first (highest-confidence) country_id, or "" when none."""
    service = ClassifierService.NATIONALITY.value
    body = _require_object(ClassifierService.NATIONALITY, payload)
    candidates = body.get("country")
    if candidates is None:
        return ""
    if not isinstance(candidates, list):
        raise EnrichmentServiceError(service, "'country' is not a list")
    if not candidates:
        return ""
    head = candidates[0]
    if not isinstance(head, dict) or not isinstance(head.get("country_id"), str):
        raise EnrichmentServiceError(
            service, f"first 'country' entry has no string country_id: {head!r}",
        )
    return head["country_id"]
