"""Productos API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ProductosError → JSON error envelopes
    - CORS configured from settings (not hardcoded)
    - Database pool created on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema bootstrap optional (auto_create_schema): alembic manages it otherwise
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from productos_api.api.error_handlers import register_error_handlers
from productos_api.api.middleware import register_request_logging
from productos_api.api.routes import health, productos, root
from productos_api.config import get_settings
from productos_api.infrastructure.database import close_db, init_db
from productos_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Inicializando base de datos...")
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        if settings.auto_create_schema:
            await manager.create_schema()
        if settings.seed_sample_data:
            await manager.seed_sample_data()
    except Exception as e:
        logger.critical(f"Error al inicializar la base de datos: {e}", exc_info=True)
        await close_db()
        raise
    logger.info(
        f"Productos API lista en http://{settings.host}:{settings.port} "
        "(documentación en /, endpoints en /productos)",
    )
    yield
    logger.info("Productos API cerrando")
    await close_db()


settings = get_settings()
app = FastAPI(
    title="Productos API", version=settings.api_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_request_logging(app)

app.include_router(root.router)
app.include_router(health.router)
app.include_router(productos.router)

register_error_handlers(app)
