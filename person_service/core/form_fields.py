"""Form Fields — pure helpers over the flat key-value map decoded from requests.

Invariants:
    - Absent and whitespace-only values are both treated as empty
    - Integer parsing accepts an optional sign and decimal digits only
    - Parsed integers fit a signed 64-bit store column (BIGINT)
    - Every failure raises an InputValidationError subclass naming the field
"""

import re
from collections.abc import Mapping

from person_service.core.errors import InvalidIntegerError, MissingFieldError

_INTEGER = re.compile(r"[+-]?[0-9]+")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def clean(value: str | None) -> str:
    """Normalize a raw form value: None → "", otherwise stripped."""
    if value is None:
        return ""
    return str(value).strip()


def parse_int(field: str, raw: str) -> int:
    """Parse a textual integer or raise InvalidIntegerError."""
    text = clean(raw)
    if not _INTEGER.fullmatch(text):
        raise InvalidIntegerError(field, text)
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidIntegerError(field, text, "a 64-bit integer")
    return value


def parse_non_negative(field: str, raw: str) -> int:
    value = parse_int(field, raw)
    if value < 0:
        raise InvalidIntegerError(field, clean(raw), "a non-negative integer")
    return value


def parse_positive(field: str, raw: str) -> int:
    value = parse_int(field, raw)
    if value < 1:
        raise InvalidIntegerError(field, clean(raw), "a positive integer")
    return value


def require_fields(values: Mapping[str, str], *fields: str) -> None:
    """Raise MissingFieldError for the first named field that is empty."""
    for name in fields:
        if not clean(values.get(name)):
            raise MissingFieldError(name)
