"""Service catalog — the fixed list of offerings the agency sells."""

from .service_catalog import ServiceCatalog

__all__ = ["ServiceCatalog"]
