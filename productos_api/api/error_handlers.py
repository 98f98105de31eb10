"""Error Handlers — global exception handlers for the Productos API.

Invariants:
    - ProductosError → its own status with {error, mensaje, links, ...context}
    - RequestValidationError → 400 "Datos inválidos" with field-level detalles
    - Unmatched routes → 404 "Ruta no encontrada" with a link home, whether the
      path or only the method failed to match
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four-layer handler: domain, validation, routing, catch-all
    - Client errors logged at WARNING, infrastructure errors at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from productos_api.api.dependencies import link_context
from productos_api.core.errors import ErrorSeverity, ProductosError
from productos_api.core.links import build_links, home_links, timestamp_now

logger = logging.getLogger(__name__)

# Wrong method on a known path answers like an unknown path
_UNMATCHED_ROUTE = (
    status.HTTP_404_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED,
)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_productos_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_productos_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ProductosError)
    async def productos_error_handler(request: Request, exc: ProductosError):
        """Handle all Productos domain/infrastructure errors."""
        log = (
            logger.warning if exc.severity in (
                ErrorSeverity.INFO, ErrorSeverity.WARNING,
            ) else logger.error
        )
        log(
            f"ProductosError: {exc.mensaje}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "operation": getattr(exc, "operation", None),
            },
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(build_links(link_context(request))),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors (body shape, query types)."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "INVALID_INPUT", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(request, exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Unmatched routes and methods."""
        ctx = link_context(request)
        if exc.status_code in _UNMATCHED_ROUTE:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "error": "Ruta no encontrada",
                    "mensaje": (
                        f"La ruta {request.method} {request.url.path} "
                        "no existe en esta API"
                    ),
                    "sugerencia": "Visita la raíz (/) para ver los endpoints disponibles",
                    "links": home_links(ctx),
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": str(exc.detail),
                "mensaje": (
                    f"La solicitud {request.method} {request.url.path} "
                    "no pudo ser procesada"
                ),
                "links": home_links(ctx),
            },
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Error interno del servidor",
                "mensaje": "Ocurrió un error inesperado. Por favor, inténtalo de nuevo.",
                "timestamp": timestamp_now(),
                "links": home_links(link_context(request)),
            },
        )


def _build_validation_error_response(
    request: Request, exc: RequestValidationError,
) -> dict:
    """Build structured validation error response."""
    return {
        "error": "Datos inválidos",
        "mensaje": "La solicitud contiene datos con formato inválido",
        "detalles": [
            {
                "campo": ".".join(str(loc) for loc in e["loc"]),
                "mensaje": e["msg"],
                "tipo": e["type"],
            }
            for e in exc.errors()
        ],
        "links": build_links(link_context(request)),
    }
