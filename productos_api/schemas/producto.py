"""Producto Schemas — response serialization of producto rows.

Invariants:
    - ProductoOut renders precio as a JSON number and timestamps as ISO-8601
    - Request bodies have no schema here; core.validation reads them so the
      API's own messages and envelope context apply to every bad body
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ProductoOut(BaseModel):
    """Public representation of a producto row."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    precio: float
    categoria: str
    descripcion: str | None = None
    fecha_creacion: datetime
    fecha_actualizacion: datetime


def serialize_producto(producto) -> dict:
    """ORM row → JSON-ready dict."""
    return ProductoOut.model_validate(producto).model_dump(mode="json")
