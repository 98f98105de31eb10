"""Producto Validation — pure business-rule checks for request data.

Invariants:
    - Every failure raises InvalidInputError (or ResourceNotFoundError for
      ids no row can have); nothing else escapes
    - Categoria is compared trimmed and lower-cased; the canonical form is persisted
    - Precio is rounded to cents before the > 0 check, so a stored price is never 0.00
    - Update assignments keep column order and always end with fecha_actualizacion

Design Decisions:
    - Request bodies arrive untyped and are read by extraer_campos: "absent"
      and "explicit null" stay distinguishable, and a bad body is reported
      only after the id and existence checks
    - These functions own both body shape and business rules
      (ADR: messages and envelope context must match the public API contract)
"""

import re
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from productos_api.core.domain_types import (
    CAMPOS_OPCIONALES,
    CAMPOS_REQUERIDOS,
    CATEGORIAS_PERMITIDAS,
    MAX_PRODUCTO_ID,
    PRECIO_MAXIMO,
    ProductoFields,
    ProductoId,
)
from productos_api.core.errors import InvalidInputError, ResourceNotFoundError

LIMIT_MIN = 1
LIMIT_MAX = 100

_CENTAVOS = Decimal("0.01")
_ID_PATTERN = re.compile(r"-?\d+")


def validar_categoria(value: Any) -> bool:
    """True iff value is a non-empty string naming an allowed category."""
    if not value or not isinstance(value, str):
        return False
    return value.strip().lower() in CATEGORIAS_PERMITIDAS


def normalizar_categoria(value: Any) -> str:
    """Return the canonical lower-case categoria or raise InvalidInputError."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(
            "Datos inválidos",
            "La categoría debe ser una cadena de texto no vacía",
        )
    canonical = value.strip().lower()
    if canonical not in CATEGORIAS_PERMITIDAS:
        raise InvalidInputError(
            "Categoría inválida",
            "La categoría debe ser una de las siguientes opciones",
            categorias_permitidas=CATEGORIAS_PERMITIDAS,
            categoria_recibida=canonical,
        )
    return canonical


def validar_filtro_categoria(value: str | None) -> str | None:
    """Normalize the optional list filter. Empty means no filter."""
    if value is None or value == "":
        return None
    if not validar_categoria(value):
        raise InvalidInputError(
            "Categoría inválida para filtro",
            "La categoría de filtro debe ser una de las siguientes opciones",
            categorias_permitidas=CATEGORIAS_PERMITIDAS,
            categoria_recibida=value,
        )
    return value.strip().lower()


def validar_nombre(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(
            "Datos inválidos",
            "El nombre debe ser una cadena de texto no vacía",
        )
    return value.strip()


def validar_precio(value: Any) -> Decimal:
    """Parse precio to a Decimal rounded to cents, strictly positive."""
    invalid = InvalidInputError(
        "Datos inválidos", "El precio debe ser un número mayor a 0",
    )
    # bool is an int subclass; true/false are not prices
    if value is None or isinstance(value, bool):
        raise invalid
    try:
        precio = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise invalid
    if not precio.is_finite():
        raise invalid
    precio = precio.quantize(_CENTAVOS, rounding=ROUND_HALF_UP)
    if precio <= 0:
        raise invalid
    if precio >= PRECIO_MAXIMO:
        raise InvalidInputError(
            "Datos inválidos",
            f"El precio debe ser menor a {PRECIO_MAXIMO}",
        )
    return precio


def normalizar_descripcion(value: Any) -> str | None:
    """Trim descripcion; empty or null becomes None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInputError(
            "Datos inválidos",
            "La descripción debe ser una cadena de texto",
        )
    return value.strip() or None


def validar_id(raw: str | int) -> ProductoId:
    """Parse a path id. Ids outside the SERIAL range cannot exist."""
    text = str(raw).strip()
    if not _ID_PATTERN.fullmatch(text):
        raise InvalidInputError(
            "ID inválido", "El ID debe ser un número válido",
        )
    producto_id = int(text)
    if producto_id < 1 or producto_id > MAX_PRODUCTO_ID:
        raise ResourceNotFoundError(producto_id)
    return ProductoId(producto_id)


def validar_paginacion(limit: int, offset: int) -> None:
    if limit < LIMIT_MIN or limit > LIMIT_MAX:
        raise InvalidInputError(
            "Parámetro inválido",
            f"El límite debe estar entre {LIMIT_MIN} y {LIMIT_MAX}",
        )
    if offset < 0:
        raise InvalidInputError(
            "Parámetro inválido", "El offset no puede ser negativo",
        )


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def validar_creacion(datos: Mapping[str, Any]) -> ProductoFields:
    """Validate a create body: required fields first, then per-field rules."""
    if any(_is_missing(datos.get(campo)) for campo in CAMPOS_REQUERIDOS):
        raise InvalidInputError(
            "Datos incompletos",
            "Los campos nombre, precio y categoría son obligatorios",
            campos_requeridos=CAMPOS_REQUERIDOS,
        )
    return ProductoFields(
        nombre=validar_nombre(datos["nombre"]),
        precio=validar_precio(datos["precio"]),
        categoria=normalizar_categoria(datos["categoria"]),
        descripcion=normalizar_descripcion(datos.get("descripcion")),
    )


def extraer_campos(cuerpo: Any) -> dict[str, Any]:
    """Writable fields present in a request body. No body means no fields."""
    if cuerpo is None:
        return {}
    if not isinstance(cuerpo, Mapping):
        raise InvalidInputError(
            "Datos inválidos",
            "El cuerpo de la solicitud debe ser un objeto JSON",
        )
    return {campo: cuerpo[campo] for campo in CAMPOS_OPCIONALES if campo in cuerpo}


def campos_suministrados(datos: Mapping[str, Any]) -> list[str]:
    """Updatable field names present in the body, in column order."""
    return [campo for campo in CAMPOS_OPCIONALES if campo in datos]


_VALIDADORES = {
    "nombre": validar_nombre,
    "precio": validar_precio,
    "categoria": normalizar_categoria,
    "descripcion": normalizar_descripcion,
}


def construir_asignaciones(
    datos: Mapping[str, Any], ahora: datetime,
) -> list[tuple[str, Any]]:
    """Build the (column, value) pairs of a partial update.

    Only supplied fields appear, each validated with the create rules.
    fecha_actualizacion is always appended last.
    """
    campos = campos_suministrados(datos)
    if not campos:
        raise InvalidInputError(
            "Datos incompletos",
            "Debe proporcionar al menos un campo para actualizar",
            campos_opcionales=CAMPOS_OPCIONALES,
        )
    asignaciones = [
        (campo, _VALIDADORES[campo](datos[campo])) for campo in campos
    ]
    asignaciones.append(("fecha_actualizacion", ahora))
    return asignaciones
