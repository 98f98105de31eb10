"""Productos Handlers — list, get, create, update, delete, purge.

Invariants:
    - Order of checks per handler: id → existence → body → field rules → SQL
    - Every handler returns a success envelope {data, mensaje?, links, meta?}
    - Failures are raised as ProductosError subclasses; InternalFailureError is
      re-labelled with the operation's user message
    - fecha_actualizacion is refreshed on every update, whatever fields changed

Design Decisions:
    - Handlers take a repository and a LinkContext, not a Request: testable
      without HTTP, and routes stay one line each
    - Existence check before update is not transactional; a row deleted in
      between is reported as NotFound by the UPDATE ... RETURNING result
"""

import functools
import logging
from datetime import datetime, timezone
from typing import Any

from productos_api.core.domain_types import Pagination
from productos_api.core.errors import InternalFailureError, ResourceNotFoundError
from productos_api.core.links import (
    LinkContext,
    build_links,
    build_meta,
    collection_links,
    timestamp_now,
)
from productos_api.core.validation import (
    campos_suministrados,
    construir_asignaciones,
    extraer_campos,
    validar_creacion,
    validar_filtro_categoria,
    validar_id,
    validar_paginacion,
)
from productos_api.schemas.producto import serialize_producto
from productos_api.services.producto_repository import ProductoRepository

logger = logging.getLogger(__name__)

PURGE_WARNING = "Esta acción no se puede deshacer"


def reports_failure(mensaje: str):
    """Replace the message of internal failures with the operation's own."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except InternalFailureError as e:
                raise InternalFailureError(mensaje, e.category, e.code) from e
        return wrapper
    return decorator


@reports_failure("No se pudieron obtener los productos")
async def listar_productos(
    repo: ProductoRepository,
    ctx: LinkContext,
    limit: int = 10,
    offset: int = 0,
    categoria: str | None = None,
) -> dict:
    validar_paginacion(limit, offset)
    filtro = validar_filtro_categoria(categoria)

    total = await repo.count(filtro)
    productos = await repo.list_page(limit, offset, filtro)

    filtros = {"categoria": filtro} if filtro else {}
    return {
        "data": [serialize_producto(p) for p in productos],
        "links": build_links(
            ctx, pagination=Pagination(limit=limit, offset=offset, total=total),
        ),
        "meta": build_meta(total, limit, offset, filtros),
    }


@reports_failure("No se pudo obtener el producto")
async def obtener_producto(
    repo: ProductoRepository, ctx: LinkContext, raw_id: str,
) -> dict:
    producto_id = validar_id(raw_id)
    producto = await repo.get(producto_id)
    if producto is None:
        raise ResourceNotFoundError(producto_id)
    return {
        "data": serialize_producto(producto),
        "links": build_links(ctx, producto_id),
        "meta": {"timestamp": timestamp_now()},
    }


@reports_failure("No se pudo crear el producto")
async def crear_producto(
    repo: ProductoRepository, ctx: LinkContext, cuerpo: Any,
) -> dict:
    fields = validar_creacion(extraer_campos(cuerpo))
    producto = await repo.create(fields, datetime.now(timezone.utc))
    logger.info(
        f"Producto {producto.id} creado",
        extra={"producto_id": producto.id},
    )
    return {
        "data": serialize_producto(producto),
        "mensaje": "Producto creado exitosamente",
        "links": build_links(ctx, producto.id),
        "meta": {"timestamp": timestamp_now()},
    }


@reports_failure("No se pudo actualizar el producto")
async def actualizar_producto(
    repo: ProductoRepository,
    ctx: LinkContext,
    raw_id: str,
    cuerpo: Any,
) -> dict:
    producto_id = validar_id(raw_id)
    if not await repo.exists(producto_id):
        raise ResourceNotFoundError(producto_id)

    datos = extraer_campos(cuerpo)
    asignaciones = construir_asignaciones(datos, datetime.now(timezone.utc))
    producto = await repo.update(producto_id, asignaciones)
    if producto is None:
        raise ResourceNotFoundError(producto_id)

    campos = campos_suministrados(datos)
    logger.info(
        f"Producto {producto_id} actualizado: {', '.join(campos)}",
        extra={"producto_id": producto_id},
    )
    return {
        "data": serialize_producto(producto),
        "mensaje": "Producto actualizado exitosamente",
        "links": build_links(ctx, producto_id),
        "meta": {
            "timestamp": timestamp_now(),
            "campos_actualizados": campos,
        },
    }


@reports_failure("No se pudo eliminar el producto")
async def eliminar_producto(
    repo: ProductoRepository, ctx: LinkContext, raw_id: str,
) -> dict:
    producto_id = validar_id(raw_id)
    producto = await repo.delete(producto_id)
    if producto is None:
        raise ResourceNotFoundError(producto_id)

    logger.info(
        f"Producto {producto_id} eliminado",
        extra={"producto_id": producto_id},
    )
    return {
        "data": serialize_producto(producto),
        "mensaje": f"Producto con ID {producto_id} eliminado exitosamente",
        "links": collection_links(ctx),
        "meta": {"timestamp": timestamp_now(), "accion": "eliminacion"},
    }


@reports_failure("No se pudieron eliminar todos los productos")
async def purgar_productos(repo: ProductoRepository, ctx: LinkContext) -> dict:
    eliminados = await repo.purge()

    if eliminados == 0:
        return {
            "data": None,
            "mensaje": "No hay productos para eliminar",
            "links": build_links(ctx),
            "meta": {"timestamp": timestamp_now(), "productos_eliminados": 0},
        }

    logger.warning(
        f"Purga completa: {eliminados} productos eliminados",
        extra={"operation": "purge"},
    )
    return {
        "data": None,
        "mensaje": (
            "Todos los productos han sido eliminados exitosamente "
            f"({eliminados} productos)"
        ),
        "advertencia": PURGE_WARNING,
        "links": collection_links(ctx),
        "meta": {
            "timestamp": timestamp_now(),
            "productos_eliminados": eliminados,
            "accion": "purga_completa",
        },
    }
