"""Orders — turning a quote into a persisted order."""

from .order_provisioner import OrderProvisioner

__all__ = ["OrderProvisioner"]
