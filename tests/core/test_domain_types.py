"""Domain Types — categories and validated field containers."""

from decimal import Decimal

import pytest

from productos_api.core.domain_types import (
    CATEGORIAS_PERMITIDAS, Categoria, ProductoFields, ProductoId,
)


def test_categoria_has_the_five_allowed_values():
    assert CATEGORIAS_PERMITIDAS == [
        "ropa", "electronica", "muebles", "deportes", "libros",
    ]
    assert Categoria("electronica") is Categoria.ELECTRONICA


def test_producto_id_wraps_int():
    assert ProductoId(3) == 3


def test_producto_fields_are_immutable():
    fields = ProductoFields("Mesa", Decimal("10.00"), "muebles")
    assert fields.descripcion is None
    with pytest.raises(AttributeError):
        fields.nombre = "Silla"
