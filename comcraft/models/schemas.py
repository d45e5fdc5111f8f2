"""
Typed records for every entity the core reads, computes, or persists.
Rows coming back from the store are mapped into these models at the
repository boundary; nothing above the repositories touches raw dicts.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import BaseModel, Field

from .enums import OrderStatus, PaymentStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Catalog ──────────────────────────────────────────────


class Tier(BaseModel):
    """One priced package within a service offering."""
    name: str
    price: float = 0.0  # USD
    features: list[str] = []
    timeline: str = ""  # free text, e.g. "2-3 weeks"


class ServiceCatalogEntry(BaseModel):
    id: str
    name: str
    category: str = ""
    description: str = ""
    tiers: list[Tier] = []  # tier 0 is the cheapest / default


class ServiceBundle(BaseModel):
    """A curated multi-service package advertised to customers."""
    name: str
    description: str = ""
    services: list[Selection] = []
    original_price: float = 0.0
    bundle_price: float = 0.0
    savings: float = 0.0


# ── Quoting ──────────────────────────────────────────────


class Selection(BaseModel):
    """A caller's choice of service + tier + quantity for one quote line."""
    service_id: str
    tier_index: Optional[int] = None  # None -> 0
    quantity: Optional[int] = None  # None -> 1


class QuoteOptions(BaseModel):
    first_time: bool = False
    rush: bool = False


class QuoteLineItem(BaseModel):
    name: str
    price: float
    timeline: str


class Quote(BaseModel):
    items: list[QuoteLineItem] = []
    subtotal: float = 0.0
    discount: float = 0.0
    total: float = 0.0
    timeline: str = ""
    savings: Optional[str] = None


# ── Customers & orders ───────────────────────────────────


class CustomerIdentity(BaseModel):
    """Identity supplied by whatever authenticated the caller."""
    discord_id: str
    discord_tag: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None


class Customer(BaseModel):
    id: str
    discord_id: str
    discord_tag: str = ""
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Order(BaseModel):
    id: Optional[str] = None
    order_number: str
    user_id: Optional[str] = None
    discord_id: str
    service_type: str = ""
    service_name: str = ""
    description: str = ""
    price: float = 0.0
    budget: str = ""
    timeline: str = ""
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    discord_channel_id: Optional[str] = None
    service_details: dict[str, Any] = {}
    created_at: datetime = Field(default_factory=_utcnow)


class OrderConfirmation(BaseModel):
    order_number: str
    order_id: str
    quote: Quote


# ── Command permissions ──────────────────────────────────


class RestrictableCommand(BaseModel):
    name: str
    label: str


class CommandPermissionRule(BaseModel):
    """
    Per-guild allow-list for one command.
    An empty allowed_role_ids means the rule does not restrict anyone.
    """
    guild_id: str
    command_name: str
    allowed_role_ids: list[str] = []
    updated_at: Optional[datetime] = None

    @property
    def is_restricting(self) -> bool:
        return bool(self.allowed_role_ids)


ServiceBundle.model_rebuild()
