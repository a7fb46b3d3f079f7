"""Stock Dashboard - CLI Entry Point.

Supports:
- quotes: Fetch the quote batch and print the projected table
- series: Fetch the recent daily closing prices of one symbol
"""

import argparse
import sys

from loguru import logger

from src.app.logic.view import project
from src.app.views.formatting import empty_table_message, format_change, format_price
from src.config.settings import load_config
from src.core.domain_models import SortConfig, SortDirection, SortKey
from src.etl.extract import AlphaVantageClient, FetchError


def cmd_quotes(args: argparse.Namespace) -> None:
    """Fetch quotes for the configured symbols and log the table."""
    logger.info("=== Fetching Quotes ===")
    config = load_config()
    client = AlphaVantageClient(config.settings)
    symbols = args.symbols or config.symbols

    try:
        quotes = client.fetch_quotes_sync(symbols)
    except FetchError as e:
        logger.error(f"Failed to fetch stock data: {e}")
        sys.exit(1)

    sort = SortConfig(
        key=SortKey(args.sort) if args.sort else None,
        direction=SortDirection.DESCENDING if args.descending else SortDirection.ASCENDING,
    )
    visible = project(quotes, args.search, sort)

    if not visible:
        logger.info(empty_table_message(args.search))
        return

    for quote in visible:
        line = f"  • {quote.symbol:<8} {format_price(quote):>12} {format_change(quote):>10}"
        if quote.error:
            logger.warning(f"{line}  ({quote.error_message})")
        else:
            logger.info(f"{line}  vol {quote.volume:,}  {quote.last_updated}")


def cmd_series(args: argparse.Namespace) -> None:
    """Fetch and log the recent closing prices of one symbol."""
    logger.info(f"=== Fetching Daily Series for {args.symbol} ===")
    config = load_config()
    client = AlphaVantageClient(config.settings)

    series = client.fetch_time_series_sync(args.symbol.upper())
    if not series:
        logger.warning(f"No price data available for {args.symbol}")
        return

    for point in series:
        logger.info(f"  • {point.date}  {point.price:,.2f}")


def main() -> None:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(description="Stock Dashboard - Quotes and Price History")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum log level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    parser_quotes = subparsers.add_parser("quotes", help="Fetch quotes and print the table")
    parser_quotes.add_argument(
        "--symbols", nargs="+", help="Symbols to fetch (default: configured universe)"
    )
    parser_quotes.add_argument("--search", default="", help="Case-insensitive symbol filter")
    parser_quotes.add_argument(
        "--sort",
        choices=[k.value for k in SortKey],
        help="Column to sort by",
    )
    parser_quotes.add_argument("--descending", action="store_true", help="Sort descending")
    parser_quotes.set_defaults(func=cmd_quotes)

    parser_series = subparsers.add_parser("series", help="Fetch recent daily closing prices")
    parser_series.add_argument("symbol", help="Ticker symbol")
    parser_series.set_defaults(func=cmd_series)

    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    args.func(args)


if __name__ == "__main__":
    main()
