"""Get Producto — fetch one by id."""


async def test_get_existing(client, seed_productos):
    res = await client.get("/productos/2")
    assert res.status_code == 200
    body = res.json()
    assert body["data"]["nombre"] == "Laptop Gamer"
    assert body["data"]["precio"] == 1200000
    assert body["data"]["categoria"] == "electronica"
    assert {"rel": "item", "href": "http://test/productos/2"} in body["links"]
    assert {"rel": "collection", "href": "http://test/productos"} in body["links"]
    assert "timestamp" in body["meta"]


async def test_get_non_numeric_id_is_400(client):
    res = await client.get("/productos/abc")
    assert res.status_code == 400
    assert res.json()["error"] == "ID inválido"


async def test_get_missing_is_404(client, seed_productos):
    res = await client.get("/productos/999999")
    assert res.status_code == 404
    body = res.json()
    assert body["error"] == "Producto no encontrado"
    assert body["mensaje"] == "No existe un producto con ID 999999"
    assert body["links"][0]["rel"] == "self"


async def test_get_id_beyond_serial_range_is_404(client):
    res = await client.get("/productos/99999999999")
    assert res.status_code == 404
