"""Failure Envelopes — store faults become JSON envelopes, never raw errors.

Invariants:
    - DatabaseError → 500 with the operation's own mensaje
    - ConflictError → 400 "Producto duplicado"
    - Any other exception → 500 generic body with timestamp
"""

import pytest
from httpx import ASGITransport, AsyncClient

from productos_api.api.dependencies import get_repository
from productos_api.core.errors import ConflictError, DatabaseError
from productos_api.main import app


class _BrokenRepository:
    """Repository whose every call fails with the configured exception."""

    def __init__(self, exc: Exception):
        self._exc = exc

    def __getattr__(self, name):
        async def _fail(*args, **kwargs):
            raise self._exc
        return _fail


@pytest.fixture
def broken_client():
    """Client factory; the app is not allowed to re-raise unhandled errors."""
    def _make(exc: Exception) -> AsyncClient:
        app.dependency_overrides[get_repository] = lambda: _BrokenRepository(exc)
        return AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        )

    yield _make
    app.dependency_overrides.clear()


async def test_database_error_on_list_is_500(broken_client):
    async with broken_client(DatabaseError("Connection or operational error", "count")) as c:
        res = await c.get("/productos")
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Error interno del servidor"
    assert body["mensaje"] == "No se pudieron obtener los productos"
    assert body["links"]


async def test_database_error_on_delete_uses_delete_message(broken_client):
    async with broken_client(DatabaseError("Database driver error", "delete")) as c:
        res = await c.delete("/productos/1")
    assert res.status_code == 500
    assert res.json()["mensaje"] == "No se pudo eliminar el producto"


async def test_conflict_on_create_is_400(broken_client):
    async with broken_client(ConflictError()) as c:
        res = await c.post(
            "/productos", json={"nombre": "Mesa", "precio": 10, "categoria": "muebles"},
        )
    assert res.status_code == 400
    assert res.json()["error"] == "Producto duplicado"


async def test_validation_runs_before_the_store(broken_client):
    async with broken_client(DatabaseError("unreachable", "count")) as c:
        res = await c.get("/productos", params={"limit": 500})
    assert res.status_code == 400


async def test_unexpected_exception_is_generic_500(broken_client):
    async with broken_client(RuntimeError("boom")) as c:
        res = await c.get("/productos/1")
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Error interno del servidor"
    assert "boom" not in body["mensaje"]
    assert "timestamp" in body
    assert body["links"] == [{"rel": "home", "href": "http://test/"}]
