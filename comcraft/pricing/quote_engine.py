"""
Quote Engine — turns service selections into a priced quote.

Order of operations matters here:
  1. line items + subtotal
  2. discount, computed on the pre-rush subtotal
  3. rush surcharge applied to the subtotal itself
  4. total = (possibly surcharged) subtotal - discount
So a rush quote charges the surcharge on the full amount while the discount
stays at its pre-rush value. Kept as-is for parity with existing quotes.
"""

from __future__ import annotations

import logging
import math
import re

from comcraft.catalog.service_catalog import ServiceCatalog
from comcraft.models.schemas import Quote, QuoteLineItem, QuoteOptions, Selection
from comcraft.pricing.pricing_config import PricingConfig

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\d+")


def parse_leading_integer(text: str, fallback: int = 2) -> int:
    """
    Return the first integer found in a free-text timeline.

    "2-3 weeks" -> 2, "Immediate" -> fallback. A parsed 0 also yields the
    fallback, since a zero-week project is never quoted.
    """
    match = _LEADING_INT.search(text or "")
    value = int(match.group()) if match else 0
    return value or fallback


class QuoteEngine:
    """Computes quotes against a service catalog."""

    def __init__(self, catalog: ServiceCatalog, config: PricingConfig | None = None):
        self.catalog = catalog
        self.config = config or PricingConfig()

    def compute_quote(
        self,
        selections: list[Selection],
        options: QuoteOptions | None = None,
    ) -> Quote:
        """
        Price a list of selections. Unknown services and out-of-range tiers
        are skipped; an empty or fully invalid list gives a zero quote.
        """
        options = options or QuoteOptions()
        cfg = self.config

        items: list[QuoteLineItem] = []
        subtotal = 0.0
        week_estimates: list[int] = []

        for selection in selections:
            entry = self.catalog.get_service(selection.service_id)
            if entry is None:
                logger.debug(f"Skipping unknown service '{selection.service_id}'")
                continue

            tier_index = selection.tier_index or 0
            tier = self.catalog.get_tier(entry.id, tier_index)
            if tier is None:
                logger.debug(f"Skipping {entry.id}: no tier at index {tier_index}")
                continue

            quantity = selection.quantity if selection.quantity and selection.quantity > 0 else 1
            line_total = tier.price * quantity

            items.append(QuoteLineItem(
                name=f"{entry.name} - {tier.name}",
                price=line_total,
                timeline=tier.timeline,
            ))
            subtotal += line_total
            # Projects run in parallel, so the longest one sets the timeline
            week_estimates.append(
                parse_leading_integer(tier.timeline, cfg.default_timeline_weeks)
            )

        timeline_weeks = max(week_estimates, default=cfg.default_timeline_weeks)

        # ── Discounts (first-time beats bundle) ──────────
        discount = 0.0
        if options.first_time:
            discount = subtotal * cfg.first_time_discount_percent
        elif len(items) >= cfg.bundle_min_items:
            discount = subtotal * cfg.bundle_discount_percent

        # ── Rush surcharge ───────────────────────────────
        if options.rush:
            subtotal *= cfg.rush_multiplier
            timeline_weeks = math.ceil(timeline_weeks / 2)

        quote = Quote(
            items=items,
            subtotal=subtotal,
            discount=discount,
            total=subtotal - discount,
            timeline=f"{timeline_weeks} weeks",
            savings=f"You save ${discount:.2f}!" if discount > 0 else None,
        )
        logger.debug(
            f"Quote: {len(items)}/{len(selections)} items, subtotal ${quote.subtotal:,.2f}, "
            f"discount ${quote.discount:,.2f}, total ${quote.total:,.2f}, {quote.timeline}"
        )
        return quote
