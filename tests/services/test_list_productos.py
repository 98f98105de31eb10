"""List Productos — pagination, filtering and parameter validation over HTTP.

Invariants:
    - Rows ordered by ascending id, at most `limit` of them
    - next iff offset + limit < total; prev iff offset > 0
    - Out-of-range limit/offset and unknown categories → 400
"""

from urllib.parse import parse_qs, urlparse

import pytest


def _rels(body):
    return [link["rel"] for link in body["links"]]


def _href(body, rel):
    return next(link["href"] for link in body["links"] if link["rel"] == rel)


async def test_list_defaults(client, seed_productos):
    res = await client.get("/productos")
    assert res.status_code == 200
    body = res.json()
    assert [p["id"] for p in body["data"]] == [1, 2, 3]
    assert body["meta"] == {"total": 3, "limit": 10, "offset": 0, "filtros": {}}
    assert _rels(body) == ["self", "home", "collection"]


async def test_list_empty_table(client):
    res = await client.get("/productos")
    assert res.status_code == 200
    assert res.json()["data"] == []
    assert res.json()["meta"]["total"] == 0


async def test_first_page_links_to_next(client, seed_productos):
    res = await client.get("/productos", params={"limit": 2, "offset": 0})
    body = res.json()
    assert [p["id"] for p in body["data"]] == [1, 2]
    assert "prev" not in _rels(body)
    query = parse_qs(urlparse(_href(body, "next")).query)
    assert query == {"limit": ["2"], "offset": ["2"]}


async def test_last_page_links_to_prev(client, seed_productos):
    res = await client.get("/productos", params={"limit": 2, "offset": 2})
    body = res.json()
    assert [p["id"] for p in body["data"]] == [3]
    assert "next" not in _rels(body)
    assert parse_qs(urlparse(_href(body, "prev")).query)["offset"] == ["0"]


async def test_offset_past_end_returns_no_rows(client, seed_productos):
    res = await client.get("/productos", params={"offset": 50})
    assert res.status_code == 200
    assert res.json()["data"] == []


async def test_filter_by_categoria_is_case_insensitive(client, seed_productos):
    res = await client.get("/productos", params={"categoria": " Electronica "})
    body = res.json()
    assert res.status_code == 200
    assert {p["categoria"] for p in body["data"]} == {"electronica"}
    assert body["meta"]["total"] == 2
    assert body["meta"]["filtros"] == {"categoria": "electronica"}


async def test_filter_is_kept_in_pagination_links(client, seed_productos):
    res = await client.get(
        "/productos", params={"categoria": "electronica", "limit": 1},
    )
    query = parse_qs(urlparse(_href(res.json(), "next")).query)
    assert query["categoria"] == ["electronica"]
    assert query["offset"] == ["1"]


async def test_unknown_categoria_filter_rejected(client, seed_productos):
    res = await client.get("/productos", params={"categoria": "juguetes"})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Categoría inválida para filtro"
    assert body["categoria_recibida"] == "juguetes"
    assert "ropa" in body["categorias_permitidas"]
    assert body["links"]


@pytest.mark.parametrize("params", [
    {"limit": 0}, {"limit": 101}, {"offset": -1},
])
async def test_out_of_range_window_rejected(client, params):
    res = await client.get("/productos", params=params)
    assert res.status_code == 400
    assert res.json()["error"] == "Parámetro inválido"


async def test_non_integer_limit_rejected(client):
    res = await client.get("/productos", params={"limit": "diez"})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Datos inválidos"
    assert body["detalles"][0]["campo"] == "query.limit"


@pytest.mark.parametrize("limit, offset", [(1, 0), (2, 1), (100, 0), (5, 3)])
async def test_page_never_exceeds_limit_or_remaining(client, seed_productos, limit, offset):
    res = await client.get("/productos", params={"limit": limit, "offset": offset})
    rows = res.json()["data"]
    assert len(rows) <= limit
    assert len(rows) <= max(0, 3 - offset)
