"""
Order Provisioner — prices a selection and persists it as a pending order.

Two sequential store round-trips per order:
  1. customer upsert by discord_id  (yields user_id)
  2. order insert referencing user_id

Known gap: with a store that has no unique index on discord_id, two
concurrent first orders from the same customer can create two customer
rows. MongoRowStore creates that index on connect().
"""

from __future__ import annotations

import logging
from typing import Callable

from comcraft.catalog.service_catalog import ServiceCatalog
from comcraft.exceptions import PersistenceError
from comcraft.models.enums import OrderStatus, PaymentStatus
from comcraft.models.schemas import (
    CustomerIdentity,
    Order,
    OrderConfirmation,
    QuoteOptions,
    Selection,
)
from comcraft.persistence.repositories import CustomerRepository, OrderRepository
from comcraft.pricing.quote_engine import QuoteEngine
from comcraft.utils.order_numbers import generate_order_number

logger = logging.getLogger(__name__)


class OrderProvisioner:
    """Creates orders. Persistence failures propagate as PersistenceError."""

    def __init__(
        self,
        catalog: ServiceCatalog,
        quote_engine: QuoteEngine,
        customers: CustomerRepository,
        orders: OrderRepository,
        number_factory: Callable[[], str] = generate_order_number,
    ):
        self.catalog = catalog
        self.quote_engine = quote_engine
        self.customers = customers
        self.orders = orders
        self.number_factory = number_factory

    def create_order(
        self,
        customer: CustomerIdentity,
        selections: list[Selection],
        options: QuoteOptions | None = None,
        channel_id: str | None = None,
    ) -> OrderConfirmation:
        options = options or QuoteOptions()
        order_number = self.number_factory()
        quote = self.quote_engine.compute_quote(selections, options)

        try:
            stored_customer = self.customers.upsert(customer)
            order = self.orders.insert(Order(
                order_number=order_number,
                user_id=stored_customer.id,
                discord_id=customer.discord_id,
                service_type=", ".join(s.service_id for s in selections),
                service_name=", ".join(self._service_name(s.service_id) for s in selections),
                description=f"Order for {len(selections)} service(s)",
                price=quote.total,
                budget=str(quote.total),
                timeline=quote.timeline,
                status=OrderStatus.PENDING,
                payment_status=PaymentStatus.PENDING,
                discord_channel_id=channel_id,
                service_details={
                    "selections": [s.model_dump() for s in selections],
                    "quote": quote.model_dump(),
                    "options": options.model_dump(),
                },
            ))
        except PersistenceError as e:
            logger.error(f"Order {order_number} for {customer.discord_id} not persisted: {e}")
            raise

        logger.info(
            f"Order {order_number} created for {customer.discord_id}: "
            f"${quote.total:,.2f}, {quote.timeline}"
        )
        return OrderConfirmation(order_number=order_number, order_id=order.id, quote=quote)

    def _service_name(self, service_id: str) -> str:
        entry = self.catalog.get_service(service_id)
        return entry.name if entry else service_id
