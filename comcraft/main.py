"""
ComCraft Commerce — Main Entry Point

Print a quote from the command line:
    python -m comcraft quote webshop:1 discord_bot --first-time --rush

Run as an API server (for the dashboard and bot):
    python -m comcraft --serve
    # or: uvicorn comcraft.api:app --reload --port 8000

Or import and use programmatically:
    from comcraft.main import quote
    result = quote([Selection(service_id="website", tier_index=1), Selection(service_id="discord_bot")])
"""

from __future__ import annotations

import argparse
import logging
import sys

from comcraft.catalog.service_catalog import ServiceCatalog
from comcraft.config import get_settings
from comcraft.models.schemas import Quote, QuoteOptions, Selection
from comcraft.pricing.quote_engine import QuoteEngine
from comcraft.utils.logger import setup_logging


def parse_selection(token: str) -> Selection:
    """
    Parse ``service[:tier[:quantity]]`` into a Selection.
    Used as an argparse type, so bad numbers become a usage error.
    """
    parts = token.split(":")
    try:
        tier_index = int(parts[1]) if len(parts) > 1 and parts[1] else None
        quantity = int(parts[2]) if len(parts) > 2 and parts[2] else None
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid selection '{token}': tier and quantity must be integers"
        )
    return Selection(service_id=parts[0], tier_index=tier_index, quantity=quantity)


def quote(selections: list[Selection], first_time: bool = False, rush: bool = False) -> Quote:
    """Compute a quote for the given selections and log a summary."""
    setup_logging(get_settings().log_level)
    engine = QuoteEngine(ServiceCatalog())
    result = engine.compute_quote(
        selections,
        QuoteOptions(first_time=first_time, rush=rush),
    )
    _print_summary(result)
    return result


def _print_summary(result: Quote) -> None:
    """Print a human-readable summary of a quote."""
    logger = logging.getLogger(__name__)

    logger.info("-" * 60)
    logger.info("  PROJECT QUOTE")
    logger.info("-" * 60)
    if not result.items:
        logger.info("  (no valid services selected)")
    for item in result.items:
        logger.info(f"  {item.name:<42} ${item.price:>10,.2f}  ({item.timeline})")
    logger.info("-" * 60)
    logger.info(f"  Subtotal:       ${result.subtotal:,.2f}")
    logger.info(f"  Discount:       ${result.discount:,.2f}")
    logger.info(f"  Total:          ${result.total:,.2f}")
    logger.info(f"  Timeline:       {result.timeline}")
    if result.savings:
        logger.info(f"  {result.savings}")
    logger.info("-" * 60)


def serve(host: str | None = None, port: int | None = None) -> None:
    """Start the FastAPI server."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)
    host = host or settings.api_host
    port = port or settings.api_port
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("comcraft.api:app", host=host, port=port, reload=settings.debug)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="comcraft", description="ComCraft quotes and API server")
    parser.add_argument("--serve", action="store_true", help="run the HTTP API")
    sub = parser.add_subparsers(dest="command")

    quote_cmd = sub.add_parser("quote", help="price a selection of services")
    quote_cmd.add_argument("services", nargs="+", type=parse_selection, help="service[:tier[:quantity]]")
    quote_cmd.add_argument("--first-time", action="store_true", help="apply first-time discount")
    quote_cmd.add_argument("--rush", action="store_true", help="rush delivery")

    args = parser.parse_args(argv)

    if args.serve:
        serve()
        return 0
    if args.command == "quote":
        quote(args.services, first_time=args.first_time, rush=args.rush)
        return 0
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
