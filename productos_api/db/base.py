"""Declarative Base and metadata for the productos schema.

Invariants:
    - Constraint and index names are derived from NAMING_CONVENTION, so
      alembic and create_all produce identical names on every dialect

Design Decisions:
    - Separate file for Base: models and alembic import it without pulling in the engine
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
