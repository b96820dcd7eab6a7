"""typegate API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TypeGateError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, type catalog and field-type registry initialized in lifespan
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from typegate.api.error_handlers import register_error_handlers
from typegate.api.route_controller import mount_routes
from typegate.api.routes import health, resources, types
from typegate.config import Settings, get_settings
from typegate.infrastructure.database import init_db
from typegate.infrastructure.observability import setup_logging
from typegate.services.field_types import FieldTypeRegistry
from typegate.services.type_catalog import TypeCatalog

logger = logging.getLogger(__name__)


def load_catalog(settings: Settings) -> TypeCatalog:
    """Catalog from settings.types_file; empty when the file does not exist."""
    if not os.path.isfile(settings.types_file):
        logger.warning(f"Types file {settings.types_file} not found, no types registered")
        return TypeCatalog()
    return TypeCatalog.from_file(settings.types_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_all()
    app.state.catalog = load_catalog(settings)
    app.state.field_types = FieldTypeRegistry()
    logger.info("typegate API started")
    yield
    await manager.dispose()
    logger.info("typegate API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="typegate API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Routes: explicit registration
    app.include_router(health.router)
    mount_routes(app, types.routes(settings))
    mount_routes(app, resources.routes(settings))
    return app


app = create_app()
