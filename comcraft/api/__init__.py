"""
FastAPI application factory and API package.

Run with:
    uvicorn comcraft.api:app --reload --port 8000

Or via main.py:
    python -m comcraft --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from comcraft.catalog.service_catalog import ServiceCatalog
from comcraft.config import Settings, get_settings
from comcraft.orders.order_provisioner import OrderProvisioner
from comcraft.permissions.access_gate import CommandAccessGate
from comcraft.persistence import (
    CommandPermissionRepository,
    CustomerRepository,
    OrderRepository,
    RowStore,
    build_store,
)
from comcraft.pricing.quote_engine import QuoteEngine
from comcraft.api.routes import health_router, catalog_router, quote_router, order_router
from comcraft.api.permission_routes import permission_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: RowStore | None = None) -> FastAPI:
    """Application factory — wire services onto app.state and register routes."""
    settings = settings or get_settings()
    store = store or build_store(settings)

    application = FastAPI(
        title="ComCraft Commerce API",
        description="Quotes, orders and command permissions for the ComCraft bot and dashboard",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Services (one instance per app) ──────────────────
    catalog = ServiceCatalog()
    quote_engine = QuoteEngine(catalog)
    application.state.settings = settings
    application.state.store = store
    application.state.catalog = catalog
    application.state.quote_engine = quote_engine
    application.state.provisioner = OrderProvisioner(
        catalog,
        quote_engine,
        CustomerRepository(store, settings.users_collection),
        OrderRepository(store, settings.orders_collection),
    )
    application.state.access_gate = CommandAccessGate(
        CommandPermissionRepository(store, settings.command_permissions_collection)
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(catalog_router, prefix="/api/catalog", tags=["Catalog"])
    application.include_router(quote_router, prefix="/api/quotes", tags=["Quotes"])
    application.include_router(order_router, prefix="/api/orders", tags=["Orders"])
    application.include_router(
        permission_router,
        prefix="/api/guilds/{guild_id}/command-permissions",
        tags=["Command Permissions"],
    )

    @application.on_event("startup")
    async def startup():
        store.connect()
        logger.info(f"Starting {settings.app_name} API ({settings.store_backend} store)")

    @application.on_event("shutdown")
    async def shutdown():
        store.close()
        logger.info(f"Stopped {settings.app_name} API")

    return application


# Module-level instance for `uvicorn comcraft.api:app`
app = create_app()
