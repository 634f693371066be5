"""Person Patch — sparse update semantics over a stored Person.

Invariants:
    - Empty or absent input means "leave unchanged", never "clear the field"
    - age, when supplied, must parse as a non-negative integer
    - apply_patch only touches supplied fields and is idempotent
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields

from person_service.core.domain_types import PersonField
from person_service.core.form_fields import clean, parse_non_negative
from person_service.core.repository_protocols import PersonLike


@dataclass(frozen=True)
class PersonPatch:
    name: str | None = None
    surname: str | None = None
    patronymic: str | None = None
    gender: str | None = None
    age: int | None = None
    nationality: str | None = None

    @classmethod
    def from_values(cls, values: Mapping[str, str]) -> "PersonPatch":
        kwargs: dict[str, object] = {}
        for field in PersonField:
            raw = clean(values.get(field.value))
            if not raw:
                continue
            if field is PersonField.AGE:
                kwargs[field.value] = parse_non_negative(field.value, raw)
            else:
                kwargs[field.value] = raw
        return cls(**kwargs)

    def is_empty(self) -> bool:
        return not self.changes()

    def changes(self) -> dict[str, object]:
        """Supplied fields only."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def apply_patch(person: PersonLike, patch: PersonPatch) -> list[str]:
    """Overwrite supplied fields in place. Returns names of fields whose value changed."""
    changed = []
    for name, value in patch.changes().items():
        if getattr(person, name) != value:
            setattr(person, name, value)
            changed.append(name)
    return changed
