"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test engine
    - db_manager patched so readiness probes see the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the AUTOINCREMENT table
      and sqlite_sequence reset mirror PostgreSQL SERIAL behavior
    - Lifespan not run by ASGITransport: schema created by the fixture instead
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import productos_api.infrastructure.database as db_module
from productos_api.db.base import Base
from productos_api.infrastructure.database import DatabaseSessionManager, get_db
from productos_api.main import app
from productos_api.models.producto import Producto

FECHA_ANTIGUA = datetime(2020, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_productos(test_db):
    """Three productos (ids 1..3) with timestamps in 2020."""
    productos = [
        Producto(
            nombre="Camiseta Básica", precio=Decimal("12000"),
            categoria="ropa", descripcion="Algodón",
            fecha_creacion=FECHA_ANTIGUA, fecha_actualizacion=FECHA_ANTIGUA,
        ),
        Producto(
            nombre="Laptop Gamer", precio=Decimal("1200000"),
            categoria="electronica", descripcion="Tarjeta gráfica dedicada",
            fecha_creacion=FECHA_ANTIGUA, fecha_actualizacion=FECHA_ANTIGUA,
        ),
        Producto(
            nombre="Smartphone Galaxy", precio=Decimal("450000"),
            categoria="electronica", descripcion=None,
            fecha_creacion=FECHA_ANTIGUA, fecha_actualizacion=FECHA_ANTIGUA,
        ),
    ]
    test_db.add_all(productos)
    await test_db.commit()
    for producto in productos:
        await test_db.refresh(producto)
    return productos
