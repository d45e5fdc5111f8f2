"""
Pricing Config — discount and surcharge constants for quotes.
Defaults are the agency's published rates.
"""

from __future__ import annotations

from pydantic import BaseModel


class PricingConfig(BaseModel):
    """Quote pricing configuration."""
    first_time_discount_percent: float = 0.15
    bundle_discount_percent: float = 0.20
    bundle_min_items: int = 2
    rush_multiplier: float = 1.5
    default_timeline_weeks: int = 2
