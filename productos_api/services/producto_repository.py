"""Producto Repository — parameterized statements against the productos table.

Invariants:
    - Every statement goes through _guard: SQLAlchemy errors roll back the
      session and surface as ConflictError or DatabaseError, never raw
    - Mutations commit before returning; reads never commit
    - Partial updates touch only the columns in the assignment list

Design Decisions:
    - build_update_statement is module-level and pure: the dynamic SET clause
      can be compiled and inspected without a database
    - Purge resets the id sequence per dialect (PostgreSQL sequence, SQLite
      sqlite_sequence row); other dialects log and skip
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncGenerator

from sqlalchemy import Update, delete, func, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from productos_api.core.domain_types import ProductoFields
from productos_api.infrastructure.database import map_db_error
from productos_api.models.producto import Producto, SEQUENCE_NAME, TABLE_NAME

logger = logging.getLogger(__name__)


def build_update_statement(
    producto_id: int, asignaciones: list[tuple[str, Any]],
) -> Update:
    """UPDATE productos SET <supplied columns> WHERE id = :id.

    Values bind in assignment order; the row selector binds last.
    """
    return (
        update(Producto)
        .where(Producto.id == producto_id)
        .values({columna: valor for columna, valor in asignaciones})
    )


class ProductoRepository:
    """Data access for Producto rows within one request session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise map_db_error(e, operation) from e

    async def count(self, categoria: str | None = None) -> int:
        query = select(func.count()).select_from(Producto)
        if categoria:
            query = query.where(Producto.categoria == categoria)
        async with self._guard("count"):
            return int(await self._db.scalar(query) or 0)

    async def list_page(
        self, limit: int, offset: int, categoria: str | None = None,
    ) -> list[Producto]:
        query = select(Producto)
        if categoria:
            query = query.where(Producto.categoria == categoria)
        query = query.order_by(Producto.id).limit(limit).offset(offset)
        async with self._guard("list"):
            result = await self._db.execute(query)
            return list(result.scalars().all())

    async def get(self, producto_id: int) -> Producto | None:
        async with self._guard("get"):
            result = await self._db.execute(
                select(Producto).where(Producto.id == producto_id),
            )
            return result.scalar_one_or_none()

    async def exists(self, producto_id: int) -> bool:
        async with self._guard("exists"):
            found = await self._db.scalar(
                select(Producto.id).where(Producto.id == producto_id),
            )
            return found is not None

    async def create(self, fields: ProductoFields, ahora: datetime) -> Producto:
        producto = Producto(
            nombre=fields.nombre,
            precio=fields.precio,
            categoria=fields.categoria,
            descripcion=fields.descripcion,
            fecha_creacion=ahora,
            fecha_actualizacion=ahora,
        )
        async with self._guard("insert"):
            self._db.add(producto)
            await self._db.commit()
            await self._db.refresh(producto)
        return producto

    async def update(
        self, producto_id: int, asignaciones: list[tuple[str, Any]],
    ) -> Producto | None:
        """Apply a partial update. None when the row vanished meanwhile."""
        stmt = build_update_statement(producto_id, asignaciones).returning(Producto)
        async with self._guard("update"):
            result = await self._db.execute(stmt)
            producto = result.scalar_one_or_none()
            await self._db.commit()
        return producto

    async def delete(self, producto_id: int) -> Producto | None:
        """Delete one row and return its prior content, or None if absent."""
        async with self._guard("delete"):
            producto = await self._db.get(Producto, producto_id)
            if producto is None:
                return None
            await self._db.delete(producto)
            await self._db.commit()
        return producto

    async def purge(self) -> int:
        """Delete every row and restart ids at 1. Returns rows removed."""
        async with self._guard("purge"):
            eliminados = int(
                await self._db.scalar(select(func.count()).select_from(Producto))
                or 0
            )
            await self._db.execute(delete(Producto))
            await self._reset_sequence()
            await self._db.commit()
        return eliminados

    async def _reset_sequence(self) -> None:
        conn = await self._db.connection()
        dialect = conn.dialect.name
        if dialect == "postgresql":
            await self._db.execute(
                text(f"ALTER SEQUENCE {SEQUENCE_NAME} RESTART WITH 1"),
            )
        elif dialect == "sqlite":
            await self._db.execute(
                text("DELETE FROM sqlite_sequence WHERE name = :name"),
                {"name": TABLE_NAME},
            )
        else:
            logger.warning(
                f"Sequence reset not supported on dialect {dialect}",
                extra={"operation": "purge"},
            )
