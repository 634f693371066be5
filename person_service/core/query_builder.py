"""Query Builder — sparse equality filters plus page/limit into a bounded QuerySpec.

Invariants:
    - An all-empty FilterSet is rejected (NoFilterError) whatever page/limit say
    - Every supplied filter is an exact-match predicate, combined with AND
    - Predicates are emitted in canonical PersonField order (deterministic spec)
    - offset = (page - 1) * limit; page and limit are positive integers
    - offset fits a signed 64-bit integer, otherwise page is rejected
    - limit never exceeds max_limit when a bound is configured
    - Pure: no IO, the record store executes the QuerySpec

Design Decisions:
    - Default page 1, default limit 10 when absent or empty
    - max_limit is a configurable bound on limit; None disables it
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields

from person_service.core.domain_types import PersonField
from person_service.core.errors import InvalidIntegerError, NoFilterError
from person_service.core.form_fields import (
    INT64_MAX, clean, parse_int, parse_positive,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class FilterSet:
    """Optional equality filters. None means "not filtered on"."""
    name: str | None = None
    surname: str | None = None
    patronymic: str | None = None
    gender: str | None = None
    age: int | None = None
    nationality: str | None = None

    @classmethod
    def from_values(cls, values: Mapping[str, str]) -> "FilterSet":
        """Read the six filter keys from a decoded form; empty means absent."""
        kwargs: dict[str, object] = {}
        for field in PersonField:
            raw = clean(values.get(field.value))
            if not raw:
                continue
            if field is PersonField.AGE:
                kwargs[field.value] = parse_int(field.value, raw)
            else:
                kwargs[field.value] = raw
        return cls(**kwargs)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def predicates(self) -> tuple[tuple[str, object], ...]:
        """(column, value) pairs for every supplied filter, canonical order."""
        return tuple(
            (field.value, getattr(self, field.value))
            for field in PersonField
            if getattr(self, field.value) is not None
        )


@dataclass(frozen=True)
class Pagination:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class QuerySpec:
    """Store-agnostic retrieval request: AND of equality predicates, then offset/limit."""
    predicates: tuple[tuple[str, object], ...]
    offset: int
    limit: int


def parse_pagination(
    page_raw: str | None, limit_raw: str | None, max_limit: int | None = None,
) -> Pagination:
    """Parse textual page/limit, applying defaults and the optional limit bound."""
    page_text = clean(page_raw)
    limit_text = clean(limit_raw)
    page = parse_positive("page", page_text) if page_text else DEFAULT_PAGE
    limit = parse_positive("limit", limit_text) if limit_text else DEFAULT_LIMIT
    if max_limit is not None and limit > max_limit:
        raise InvalidIntegerError(
            "limit", limit_text, f"at most {max_limit}",
        )
    return Pagination(page=page, limit=limit)


def build_query(filters: FilterSet, page: int, limit: int) -> QuerySpec:
    """Build the QuerySpec. Rejects the all-empty filter set."""
    if filters.is_empty():
        raise NoFilterError()
    if page < 1:
        raise InvalidIntegerError("page", str(page), "a positive integer")
    if limit < 1:
        raise InvalidIntegerError("limit", str(limit), "a positive integer")
    if page - 1 > INT64_MAX // limit:
        raise InvalidIntegerError(
            "page", str(page), f"at most {INT64_MAX // limit + 1} for limit {limit}",
        )
    pagination = Pagination(page=page, limit=limit)
    return QuerySpec(
        predicates=filters.predicates(),
        offset=pagination.offset,
        limit=pagination.limit,
    )


def build_query_from_values(
    values: Mapping[str, str], max_limit: int | None = None,
) -> QuerySpec:
    """Decoded form → QuerySpec. The empty-filter check runs before pagination parsing."""
    filters = FilterSet.from_values(values)
    if filters.is_empty():
        raise NoFilterError()
    pagination = parse_pagination(
        values.get("page"), values.get("limit"), max_limit,
    )
    return build_query(filters, pagination.page, pagination.limit)
