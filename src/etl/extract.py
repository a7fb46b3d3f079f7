"""Data extraction layer for the Alpha Vantage HTTP API.

Wraps httpx calls and maps raw payloads via the mapping layer.
Quotes are fetched as a batch that either settles completely or fails as a
whole; the daily series degrades to an empty list on any failure.
"""

import asyncio
from collections.abc import Sequence
from typing import Any

import httpx
from loguru import logger

from src.config.settings import DashboardSettings
from src.core.domain_models import PricePoint, Quote
from src.core.mapper import map_daily_series, map_global_quote


class FetchError(Exception):
    """Transport-level failure: network unreachable, timeout, non-2xx status or non-JSON body."""

    def __init__(self, message: str, symbol: str | None = None) -> None:
        super().__init__(message)
        self.symbol = symbol


class AlphaVantageClient:
    """Handles all external data fetching from Alpha Vantage.

    No retry logic: a throttling note from the provider is surfaced as data.
    """

    def __init__(
        self,
        settings: DashboardSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Provider settings, read from the environment if omitted
            transport: Optional httpx transport (e.g. `httpx.MockTransport` in tests)
        """
        self.settings = settings or DashboardSettings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.request_timeout,
            transport=self._transport,
        )

    async def _get_json(self, client: httpx.AsyncClient, params: dict[str, str]) -> Any:
        symbol = params.get("symbol")
        query = {**params, "apikey": self.settings.api_key}
        try:
            response = await client.get(self.settings.base_url, params=query)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP error! Status: {e.response.status_code}", symbol) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Request failed: {e!r}", symbol) from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON response: {e}", symbol) from e

    async def _fetch_quote(self, client: httpx.AsyncClient, symbol: str) -> Quote:
        payload = await self._get_json(client, {"function": "GLOBAL_QUOTE", "symbol": symbol})
        return map_global_quote(payload, symbol)

    async def fetch_quotes(self, symbols: Sequence[str]) -> list[Quote]:
        """
        Fetch the latest quote for every symbol.

        All requests are started together and awaited as one batch. The result
        is index-aligned with `symbols`; duplicates each produce their own quote.

        Args:
            symbols: Non-empty list of ticker symbols

        Returns:
            One Quote per input symbol. Provider soft errors are errored quotes.

        Raises:
            ValueError: If `symbols` is empty or contains a blank symbol
            FetchError: If any request fails at the transport level
        """
        if not symbols:
            raise ValueError("At least one symbol is required")
        if any(not symbol or not symbol.strip() for symbol in symbols):
            raise ValueError("Symbols must not be blank")

        logger.info(f"Fetching quotes for {len(symbols)} symbols")

        async with self._client() as client:
            tasks = [self._fetch_quote(client, symbol) for symbol in symbols]
            results = await asyncio.gather(*tasks, return_exceptions=True)

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            first = failures[0]
            logger.error(f"Quote batch failed ({len(failures)}/{len(symbols)}): {first}")
            raise first

        quotes = [r for r in results if isinstance(r, Quote)]
        errored = sum(1 for q in quotes if q.error)
        if errored:
            logger.warning(f"Quote batch completed with {errored} errored symbols")
        else:
            logger.success(f"Fetched {len(quotes)} quotes")
        return quotes

    async def fetch_time_series(self, symbol: str) -> list[PricePoint]:
        """
        Fetch the recent daily closing prices of a symbol.

        Never raises for provider or transport problems: the chart is
        supplementary, so every failure degrades to an empty series.

        Returns:
            Up to `series_window` price points in ascending date order
        """
        logger.info(f"[{symbol}] Fetching daily series")
        params = {
            "function": "TIME_SERIES_DAILY",
            "symbol": symbol,
            "outputsize": self.settings.series_output_size,
        }
        try:
            async with self._client() as client:
                payload = await self._get_json(client, params)
        except FetchError as e:
            logger.error(f"[{symbol}] Failed to fetch daily series: {e}")
            return []

        series = map_daily_series(payload, window=self.settings.series_window)
        if series:
            logger.success(f"[{symbol}] Fetched {len(series)} price points")
        return series

    def fetch_quotes_sync(self, symbols: Sequence[str]) -> list[Quote]:
        return asyncio.run(self.fetch_quotes(symbols))

    def fetch_time_series_sync(self, symbol: str) -> list[PricePoint]:
        return asyncio.run(self.fetch_time_series(symbol))
