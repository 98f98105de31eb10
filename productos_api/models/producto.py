"""Producto ORM — the single persisted entity.

Invariants:
    - id is an autoincrement integer primary key, never reused while rows live
      (SQLite AUTOINCREMENT, PostgreSQL SERIAL sequence productos_id_seq)
    - precio is DECIMAL(10,2); categoria holds the canonical lower-case value
    - fecha_creacion set once; fecha_actualizacion refreshed on every mutation

Design Decisions:
    - Column names mirror the public JSON fields: rows serialize without renaming
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from productos_api.db.base import Base

TABLE_NAME = "productos"
SEQUENCE_NAME = f"{TABLE_NAME}_id_seq"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Producto(Base):
    """A catalogue product."""
    __tablename__ = TABLE_NAME
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    precio: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    categoria: Mapped[str] = mapped_column(String(100), nullable=False)
    descripcion: Mapped[str | None] = mapped_column(Text, nullable=True)
    fecha_creacion: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    fecha_actualizacion: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
