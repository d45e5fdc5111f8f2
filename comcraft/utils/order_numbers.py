"""
Human-readable reference numbers for orders and tickets.

Format: <prefix> + last 6 digits of the current unix time in milliseconds
+ 3 uppercase base-36 characters. Uniqueness is probabilistic only.
"""

from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_uppercase


def _reference_number(prefix: str, now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    timestamp = str(now_ms).zfill(6)[-6:]
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(3))
    return f"{prefix}{timestamp}{suffix}"


def generate_order_number(now_ms: int | None = None) -> str:
    """Return an order number such as ``CC123456ABC``."""
    return _reference_number("CC", now_ms)


def generate_ticket_number(now_ms: int | None = None) -> str:
    """Return a support ticket number such as ``TC123456ABC``."""
    return _reference_number("TC", now_ms)
