"""Person ORM — the single persisted entity, one flat row per person.

Invariants:
    - id is an autoincrement 64-bit primary key, assigned by the store, never reused
    - name and surname are non-nullable (non-emptiness enforced before persistence)
    - age is a non-negative 64-bit integer (check constraint); 0 means unknown
    - patronymic, gender, nationality default to the empty string

Design Decisions:
    - Table name "people" keeps the layout of existing deployments
    - BIGINT columns; SQLite gets INTEGER for id so it stays a rowid alias
      and still autoincrements (SQLite INTEGER is 64-bit already)
"""

from sqlalchemy import BigInteger, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from person_service.db.base import Base

_BIGINT = BigInteger().with_variant(Integer, "sqlite")


class Person(Base):
    """A named individual with enriched demographic attributes."""
    __tablename__ = "people"
    __table_args__ = (
        CheckConstraint("age >= 0", name="ck_people_age_non_negative"),
    )

    id: Mapped[int] = mapped_column(
        _BIGINT, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    surname: Mapped[str] = mapped_column(String, nullable=False)
    patronymic: Mapped[str] = mapped_column(
        String, nullable=False, default="",
    )
    gender: Mapped[str] = mapped_column(String, nullable=False, default="")
    age: Mapped[int] = mapped_column(_BIGINT, nullable=False, default=0)
    nationality: Mapped[str] = mapped_column(
        String, nullable=False, default="",
    )

