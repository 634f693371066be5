"""Initial schema — people.

Revision ID: 001_create_people
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_people"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "people",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("surname", sa.String, nullable=False),
        sa.Column("patronymic", sa.String, nullable=False, server_default=""),
        sa.Column("gender", sa.String, nullable=False, server_default=""),
        sa.Column("age", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("nationality", sa.String, nullable=False, server_default=""),
        sa.CheckConstraint("age >= 0", name="ck_people_age_non_negative"),
    )


def downgrade() -> None:
    op.drop_table("people")
