"""Request Dependencies — per-request collaborators injected with Depends.

Invariants:
    - One AsyncSession (and one repository) per request, from the lifespan-owned pool
    - LinkContext built from the incoming request only
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from productos_api.core.links import LinkContext
from productos_api.infrastructure.database import get_db
from productos_api.services.producto_repository import ProductoRepository


def link_context(request: Request) -> LinkContext:
    return LinkContext(
        base_url=str(request.base_url),
        self_url=str(request.url),
        query=dict(request.query_params),
    )


async def get_repository(
    db: AsyncSession = Depends(get_db),
) -> ProductoRepository:
    return ProductoRepository(db)
