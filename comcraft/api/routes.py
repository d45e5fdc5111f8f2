"""
API routes — thin HTTP layer over the catalog, quote engine and provisioner.

Routes:
  GET  /health                      → API health check
  GET  /api/catalog                 → All services with tiers
  GET  /api/catalog/bundles         → Curated service bundles
  GET  /api/catalog/{service_id}    → One service as a display card
  POST /api/quotes                  → Price a selection
  POST /api/orders                  → Price and persist an order
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from comcraft.exceptions import PersistenceError
from comcraft.models.schemas import (
    CustomerIdentity,
    OrderConfirmation,
    Quote,
    QuoteOptions,
    Selection,
    ServiceBundle,
    ServiceCatalogEntry,
)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
catalog_router = APIRouter()
quote_router = APIRouter()
order_router = APIRouter()


# ── Request schemas ──────────────────────────────────────
class QuoteRequest(BaseModel):
    selections: list[Selection] = []
    options: QuoteOptions = QuoteOptions()


class OrderRequest(BaseModel):
    customer: CustomerIdentity
    selections: list[Selection] = []
    options: QuoteOptions = QuoteOptions()
    channel_id: Optional[str] = None


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Catalog ──────────────────────────────────────────────

@catalog_router.get("", response_model=list[ServiceCatalogEntry])
async def list_services(request: Request):
    return request.app.state.catalog.list_services()


@catalog_router.get("/bundles", response_model=list[ServiceBundle])
async def list_bundles(request: Request):
    return request.app.state.catalog.popular_bundles()


@catalog_router.get("/{service_id}")
async def get_service_card(request: Request, service_id: str, tier_index: Optional[int] = None) -> dict[str, Any]:
    card = request.app.state.catalog.render_service(service_id, tier_index)
    if card is None:
        raise HTTPException(status_code=404, detail=f"Service {service_id} not found")
    return card


# ── Quotes & orders ──────────────────────────────────────

@quote_router.post("", response_model=Quote)
async def create_quote(request: Request, body: QuoteRequest):
    return request.app.state.quote_engine.compute_quote(body.selections, body.options)


@order_router.post("", response_model=OrderConfirmation)
def create_order(request: Request, body: OrderRequest):
    """Blocking store I/O, so this runs in FastAPI's threadpool."""
    try:
        return request.app.state.provisioner.create_order(
            body.customer, body.selections, body.options, channel_id=body.channel_id
        )
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=f"Order could not be saved: {e}")
