"""Pricing — quote computation over the service catalog."""

from .pricing_config import PricingConfig
from .quote_engine import QuoteEngine, parse_leading_integer

__all__ = ["PricingConfig", "QuoteEngine", "parse_leading_integer"]
