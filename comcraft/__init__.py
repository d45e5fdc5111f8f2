"""ComCraft Commerce — quoting, order provisioning and command permissions."""

__version__ = "0.1.0"
