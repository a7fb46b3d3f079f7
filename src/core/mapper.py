"""
Mapping Layer: Transforms Alpha Vantage payloads to domain models.

This module bridges the gap between raw provider JSON (string-typed fields,
numbered keys, throttling notes) and our internal representation
(Pydantic models + Polars DataFrames).
"""

from typing import Any

import polars as pl
from loguru import logger

from src.core.domain_models import (
    FALLBACK_ERROR_MESSAGE,
    SERIES_WINDOW,
    PricePoint,
    Quote,
)

GLOBAL_QUOTE_KEY = "Global Quote"
DAILY_SERIES_KEY = "Time Series (Daily)"

# Keys the provider uses to explain why no data was returned
PROVIDER_MESSAGE_KEYS = ["Note", "Information", "Error Message"]


def parse_percent(text: str) -> float:
    """
    Convert a percent-change string such as "1.23%" or "-0.50%" to a float.

    Raises:
        ValueError: If the remaining text is not numeric
    """
    return float(str(text).strip().rstrip("%"))


def provider_message(payload: Any) -> str:
    """Extract the provider's note/information message, or the generic fallback."""
    if isinstance(payload, dict):
        for key in PROVIDER_MESSAGE_KEYS:
            message = payload.get(key)
            if message:
                return str(message)
    return FALLBACK_ERROR_MESSAGE


def map_global_quote(payload: Any, requested_symbol: str) -> Quote:
    """
    Map a GLOBAL_QUOTE payload to a Quote.

    Args:
        payload: Decoded JSON body of the quote endpoint
        requested_symbol: Symbol the request was issued for. Used for errored
            quotes since error payloads may lack the symbol.

    Returns:
        Valid Quote, or an errored Quote carrying the provider message
    """
    raw_quote = payload.get(GLOBAL_QUOTE_KEY) if isinstance(payload, dict) else None

    if not isinstance(raw_quote, dict) or not raw_quote:
        message = provider_message(payload)
        logger.warning(f"[{requested_symbol}] No usable quote: {message}")
        return Quote.errored(requested_symbol, message)

    try:
        return Quote(
            symbol=raw_quote.get("01. symbol") or requested_symbol,
            price=float(raw_quote["05. price"]),
            previous_price=float(raw_quote["08. previous close"]),
            change=float(raw_quote["09. change"]),
            change_percent=parse_percent(raw_quote["10. change percent"]),
            last_updated=str(raw_quote["07. latest trading day"]),
            volume=int(raw_quote["06. volume"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"[{requested_symbol}] Malformed quote payload: {e}")
        return Quote.errored(requested_symbol, provider_message(payload))


def map_daily_series(payload: Any, window: int = SERIES_WINDOW) -> list[PricePoint]:
    """
    Map a TIME_SERIES_DAILY payload to the most recent closing prices.

    Dates are ordered as calendar dates (oldest to newest) and only the last
    `window` trading days are kept. Rows with an unparseable date or close are
    dropped. A missing or malformed series yields an empty list.
    """
    raw_series = payload.get(DAILY_SERIES_KEY) if isinstance(payload, dict) else None

    if not isinstance(raw_series, dict):
        logger.warning(f"No daily series in payload: {provider_message(payload)}")
        return []

    records = [
        {
            "date": str(day),
            "close": None if not isinstance(values, dict) else _as_text(values.get("4. close")),
        }
        for day, values in raw_series.items()
    ]
    df_raw = pl.DataFrame(records, schema={"date": pl.Utf8, "close": pl.Utf8})

    df = (
        df_raw.with_columns(
            pl.col("date").str.strip_chars().str.to_date("%Y-%m-%d", strict=False),
            pl.col("close").str.strip_chars().cast(pl.Float64, strict=False).alias("price"),
        )
        .drop_nulls(["date", "price"])
        .filter(pl.col("price").is_finite() & (pl.col("price") >= 0))
    )

    dropped = df_raw.height - df.height
    if dropped:
        logger.warning(f"Dropped {dropped} unparseable rows from daily series")

    df = (
        df.sort("date", maintain_order=True)
        .tail(window)
        .select(pl.col("date").dt.strftime("%Y-%m-%d"), pl.col("price"))
    )

    return [PricePoint(**row) for row in df.iter_rows(named=True)]


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
