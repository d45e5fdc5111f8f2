from .logger import setup_logging
from .order_numbers import generate_order_number, generate_ticket_number

__all__ = ["setup_logging", "generate_order_number", "generate_ticket_number"]
