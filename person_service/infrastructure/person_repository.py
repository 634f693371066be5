"""Person Repository — SQLAlchemy implementation of the PersonRepository protocol.

Invariants:
    - Bound to one AsyncSession (one request); commits after every write
    - execute(): every predicate is column == value (AND), ordered by id,
      then offset/limit
    - get_by_id / delete_by_id raise ResourceNotFoundError for unknown ids
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from person_service.core.domain_types import PersonId
from person_service.core.errors import ResourceNotFoundError
from person_service.core.query_builder import QuerySpec
from person_service.models.person import Person


class SqlPersonRepository:
    """Record store over the people table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, person: Person) -> Person:
        self.db.add(person)
        await self.db.commit()
        await self.db.refresh(person)
        return person

    async def get_by_id(self, person_id: PersonId) -> Person:
        person = await self.db.get(Person, person_id)
        if person is None:
            raise ResourceNotFoundError("Person", str(person_id))
        return person

    async def execute(self, spec: QuerySpec) -> list[Person]:
        query = select(Person)
        for column, value in spec.predicates:
            query = query.where(getattr(Person, column) == value)
        query = query.order_by(Person.id).offset(spec.offset).limit(spec.limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def save(self, person: Person) -> None:
        self.db.add(person)
        await self.db.commit()

    async def delete_by_id(self, person_id: PersonId) -> None:
        person = await self.get_by_id(person_id)
        await self.db.delete(person)
        await self.db.commit()
