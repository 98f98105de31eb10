"""Database Session Manager — async connection pool with rollback, error mapping and bootstrap.

Invariants:
    - Every session auto-rolls-back on a SQLAlchemy exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped by map_db_error: unique violations → ConflictError,
      everything else → DatabaseError
    - The manager is created in the lifespan (init_db) and disposed there (close_db)

Design Decisions:
    - Module-level db_manager set on startup: routes receive sessions via Depends(get_db),
      never by importing the engine (ADR: no global import side effects)
    - expire_on_commit=False: ORM rows stay readable after commit in async context
    - Schema bootstrap kept here (create_schema, seed_sample_data) for deployments
      without alembic; both are idempotent
"""

import logging
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import AsyncGenerator

from sqlalchemy import func, select, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from productos_api.core.errors import (
    ConflictError, DatabaseError, ProductosError,
)
from productos_api.db.base import Base
from productos_api.models.producto import Producto

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"

SAMPLE_PRODUCTOS: list[dict] = [
    {"nombre": "Camiseta Básica", "precio": Decimal("12000"), "categoria": "ropa",
     "descripcion": "Camiseta de algodón 100% en varios colores"},
    {"nombre": "Pantalón Mezclilla", "precio": Decimal("25000"), "categoria": "ropa",
     "descripcion": "Pantalón de mezclilla azul clásico"},
    {"nombre": "Smartphone Galaxy", "precio": Decimal("450000"), "categoria": "electronica",
     "descripcion": "Teléfono inteligente con pantalla de 6.5 pulgadas"},
    {"nombre": "Laptop Gamer", "precio": Decimal("1200000"), "categoria": "electronica",
     "descripcion": "Laptop para gaming con tarjeta gráfica dedicada"},
    {"nombre": "Mesa de Madera", "precio": Decimal("85000"), "categoria": "muebles",
     "descripcion": "Mesa de comedor para 4 personas"},
    {"nombre": "Silla Ergonómica", "precio": Decimal("95000"), "categoria": "muebles",
     "descripcion": "Silla de oficina con soporte lumbar"},
    {"nombre": "Balón de Fútbol", "precio": Decimal("18000"), "categoria": "deportes",
     "descripcion": "Balón oficial tamaño 5"},
    {"nombre": "Raqueta de Tenis", "precio": Decimal("75000"), "categoria": "deportes",
     "descripcion": "Raqueta profesional de tenis"},
    {"nombre": "Libro de Cocina", "precio": Decimal("28000"), "categoria": "libros",
     "descripcion": "Recetas tradicionales mexicanas"},
    {"nombre": "Novela Clásica", "precio": Decimal("15000"), "categoria": "libros",
     "descripcion": "Edición especial de literatura universal"},
]


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a uniqueness violation (PostgreSQL 23505 or SQLite)."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(orig)


def map_db_error(exc: SQLAlchemyError, operation: str) -> ProductosError:
    """Translate a SQLAlchemy exception into the domain error hierarchy."""
    if isinstance(exc, IntegrityError):
        if is_unique_violation(exc):
            logger.warning(
                f"DB unique violation during {operation}: {exc}",
                extra={"operation": operation, "error_code": "CONFLICT"},
            )
            return ConflictError()
        logger.error(
            f"DB integrity error during {operation}: {exc}",
            extra={"operation": operation},
        )
        return DatabaseError("Integrity constraint violated", operation)
    if isinstance(exc, OperationalError):
        logger.error(
            f"DB operational error during {operation}: {exc}",
            extra={"operation": operation},
        )
        return DatabaseError("Connection or operational error", operation)
    if isinstance(exc, DBAPIError):
        logger.error(
            f"DB driver error during {operation}: {exc}",
            extra={"operation": operation},
        )
        return DatabaseError("Database driver error", operation)
    logger.error(
        f"SQLAlchemy error during {operation}: {exc}",
        extra={"operation": operation},
    )
    return DatabaseError("Database operation failed", operation)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 10, max_overflow: int = 5,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        # SQLite uses a static/single-connection pool that rejects sizing options
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise map_db_error(e, "session") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def create_schema(self) -> None:
        """Create the productos table when missing."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info('Tabla "productos" verificada/creada')

    async def seed_sample_data(self) -> int:
        """Insert the sample catalogue into an empty table. Returns rows inserted."""
        async with self.session() as db:
            total = await db.scalar(select(func.count()).select_from(Producto))
            if total:
                return 0
            db.add_all(Producto(**datos) for datos in SAMPLE_PRODUCTOS)
            await db.commit()
        logger.info(f"Datos de prueba insertados ({len(SAMPLE_PRODUCTOS)} productos)")
        return len(SAMPLE_PRODUCTOS)

    async def close(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.close()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
