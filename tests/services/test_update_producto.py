"""Update Producto — partial updates touch only supplied fields.

Invariants:
    - Unsupplied fields unchanged; fecha_actualizacion always refreshed
    - Existence checked before the body (404 wins over empty body)
    - campos_actualizados lists the supplied fields
"""

import pytest


async def test_price_only_update_keeps_other_fields(client, seed_productos):
    before = (await client.get("/productos/2")).json()["data"]

    res = await client.put("/productos/2", json={"precio": 99})
    assert res.status_code == 200
    body = res.json()
    after = body["data"]

    assert after["precio"] == 99
    for campo in ("nombre", "categoria", "descripcion", "fecha_creacion"):
        assert after[campo] == before[campo]
    assert after["fecha_actualizacion"] != before["fecha_actualizacion"]
    assert not after["fecha_actualizacion"].startswith("2020")
    assert body["meta"]["campos_actualizados"] == ["precio"]
    assert body["mensaje"] == "Producto actualizado exitosamente"


async def test_update_is_persisted(client, seed_productos):
    await client.put("/productos/1", json={"nombre": "Polera", "categoria": " DEPORTES "})
    data = (await client.get("/productos/1")).json()["data"]
    assert data["nombre"] == "Polera"
    assert data["categoria"] == "deportes"
    assert data["precio"] == 12000


async def test_empty_descripcion_clears_it(client, seed_productos):
    res = await client.put("/productos/1", json={"descripcion": ""})
    assert res.status_code == 200
    assert res.json()["data"]["descripcion"] is None
    assert res.json()["meta"]["campos_actualizados"] == ["descripcion"]


async def test_empty_body_rejected(client, seed_productos):
    res = await client.put("/productos/1", json={})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Datos incompletos"
    assert body["campos_opcionales"] == ["nombre", "precio", "categoria", "descripcion"]


async def test_missing_producto_is_404_even_with_empty_body(client, seed_productos):
    res = await client.put("/productos/999999", json={})
    assert res.status_code == 404


async def test_non_numeric_id_is_400(client):
    res = await client.put("/productos/uno", json={"precio": 1})
    assert res.status_code == 400
    assert res.json()["error"] == "ID inválido"


async def test_invalid_field_rejects_whole_update(client, seed_productos):
    res = await client.put("/productos/1", json={"nombre": "Nuevo", "precio": 0})
    assert res.status_code == 400
    data = (await client.get("/productos/1")).json()["data"]
    assert data["nombre"] == "Camiseta Básica"


async def test_null_price_rejected(client, seed_productos):
    res = await client.put("/productos/1", json={"precio": None})
    assert res.status_code == 400


async def test_unknown_categoria_rejected(client, seed_productos):
    res = await client.put("/productos/1", json={"categoria": "juguetes"})
    assert res.status_code == 400
    assert res.json()["categoria_recibida"] == "juguetes"


@pytest.mark.parametrize("body", [{"precio": "abc"}, ["precio"], "texto"])
async def test_missing_producto_is_404_before_body_checks(client, seed_productos, body):
    res = await client.put("/productos/999999", json=body)
    assert res.status_code == 404
    assert res.json()["error"] == "Producto no encontrado"


async def test_non_numeric_precio_uses_field_message(client, seed_productos):
    res = await client.put("/productos/1", json={"precio": "abc"})
    assert res.status_code == 400
    assert res.json()["mensaje"] == "El precio debe ser un número mayor a 0"


async def test_absent_body_is_incomplete(client, seed_productos):
    res = await client.put("/productos/1")
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Datos incompletos"
    assert body["campos_opcionales"] == ["nombre", "precio", "categoria", "descripcion"]


async def test_non_object_body_rejected(client, seed_productos):
    res = await client.put("/productos/1", json=[1, 2])
    assert res.status_code == 400
    assert res.json()["mensaje"] == "El cuerpo de la solicitud debe ser un objeto JSON"
