"""Root Route — machine-readable API description at GET /."""

from fastapi import APIRouter, Request

from productos_api.config import get_settings
from productos_api.core.api_docs import build_api_documentation

router = APIRouter(tags=["root"])


@router.get("/")
async def api_documentation(request: Request):
    return build_api_documentation(
        str(request.base_url), get_settings().api_version,
    )
