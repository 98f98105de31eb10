"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Categoria enumerates the closed set of allowed categories (lower-case values)
    - ProductoId wraps int — ids are positive and fit a 32-bit SERIAL column
    - ProductoFields holds already-validated values, ready to persist

Design Decisions:
    - str Enum for Categoria: serializes to JSON without custom encoders
    - NewType over wrapper classes: zero runtime cost, full type-checker support
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProductoId = NewType("ProductoId", int)

MAX_PRODUCTO_ID = 2_147_483_647  # upper bound of a PostgreSQL SERIAL


# ─── Enums ───────────────────────────────────────────────────────

class Categoria(str, Enum):
    """Allowed product categories — maps to DB `categoria` column."""
    ROPA = "ropa"
    ELECTRONICA = "electronica"
    MUEBLES = "muebles"
    DEPORTES = "deportes"
    LIBROS = "libros"


CATEGORIAS_PERMITIDAS: list[str] = [c.value for c in Categoria]

# Fields accepted in create/update bodies, in column order
CAMPOS_REQUERIDOS: list[str] = ["nombre", "precio", "categoria"]
CAMPOS_OPCIONALES: list[str] = ["nombre", "precio", "categoria", "descripcion"]


# ─── Value Types ─────────────────────────────────────────────────

PRECIO_MAXIMO = Decimal("100000000")  # DECIMAL(10,2) holds < 10^8


@dataclass(frozen=True)
class ProductoFields:
    """Validated column values for a new producto."""
    nombre: str
    precio: Decimal
    categoria: str
    descripcion: str | None = None


@dataclass(frozen=True)
class Pagination:
    """Page window plus total matching rows."""
    limit: int
    offset: int
    total: int
