"""Productos Routes — HTTP surface of the productos resource.

Invariants:
    - DELETE /productos/purge registered before DELETE /productos/{producto_id}
    - Path ids and bodies arrive unparsed; parsing and its errors belong to the
      handlers, so a missing producto is reported before a malformed body
    - The collection answers with and without a trailing slash
    - Routes never contain business logic (delegate to services/productos_service)
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from productos_api.api.dependencies import get_repository, link_context
from productos_api.core.links import LinkContext
from productos_api.services import productos_service as service
from productos_api.services.producto_repository import ProductoRepository

router = APIRouter(prefix="/productos", tags=["productos"])


@router.get("")
@router.get("/", include_in_schema=False)
async def list_productos(
    limit: int = Query(10),
    offset: int = Query(0),
    categoria: str | None = Query(None),
    repo: ProductoRepository = Depends(get_repository),
    ctx: LinkContext = Depends(link_context),
):
    """List productos with pagination and optional categoria filter."""
    return await service.listar_productos(repo, ctx, limit, offset, categoria)


@router.get("/{producto_id}")
async def get_producto(
    producto_id: str,
    repo: ProductoRepository = Depends(get_repository),
    ctx: LinkContext = Depends(link_context),
):
    return await service.obtener_producto(repo, ctx, producto_id)


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_producto(
    body: Any = Body(None),
    repo: ProductoRepository = Depends(get_repository),
    ctx: LinkContext = Depends(link_context),
):
    return await service.crear_producto(repo, ctx, body)


@router.put("/{producto_id}")
async def update_producto(
    producto_id: str,
    body: Any = Body(None),
    repo: ProductoRepository = Depends(get_repository),
    ctx: LinkContext = Depends(link_context),
):
    """Partial update — only supplied fields change."""
    return await service.actualizar_producto(
        repo, ctx, producto_id, body,
    )


@router.delete("/purge")
async def purge_productos(
    repo: ProductoRepository = Depends(get_repository),
    ctx: LinkContext = Depends(link_context),
):
    """Delete every producto and restart ids at 1. Irreversible."""
    return await service.purgar_productos(repo, ctx)


@router.delete("/{producto_id}")
async def delete_producto(
    producto_id: str,
    repo: ProductoRepository = Depends(get_repository),
    ctx: LinkContext = Depends(link_context),
):
    return await service.eliminar_producto(repo, ctx, producto_id)
