"""Shared payload builders and fake transports for the dashboard tests."""

from collections.abc import Callable
from datetime import date, timedelta
from typing import Any

import httpx
import pytest

from src.config.settings import DashboardSettings
from src.etl.extract import AlphaVantageClient

THROTTLE_NOTE = (
    "Thank you for using Alpha Vantage! Our standard API call frequency is "
    "5 calls per minute and 500 calls per day."
)


def quote_payload(
    symbol: str,
    price: str = "150.0000",
    previous_close: str = "148.5000",
    change: str = "1.5000",
    change_percent: str = "1.0101%",
    volume: str = "51234567",
    day: str = "2024-03-15",
) -> dict[str, Any]:
    """GLOBAL_QUOTE response body as returned by the provider."""
    return {
        "Global Quote": {
            "01. symbol": symbol,
            "02. open": price,
            "03. high": price,
            "04. low": price,
            "05. price": price,
            "06. volume": volume,
            "07. latest trading day": day,
            "08. previous close": previous_close,
            "09. change": change,
            "10. change percent": change_percent,
        }
    }


def series_payload(start: date, days: int, shuffle: bool = True) -> dict[str, Any]:
    """TIME_SERIES_DAILY body with one entry per calendar day from `start`.

    Closing price equals the day offset, so ordering is easy to assert. The
    provider lists newest first; `shuffle` scrambles the order further.
    """
    entries = {
        (start + timedelta(days=i)).isoformat(): {
            "1. open": f"{i}.0000",
            "4. close": f"{i}.0000",
            "5. volume": "1000",
        }
        for i in range(days)
    }
    keys = list(entries)
    if shuffle:
        keys = keys[::2] + keys[1::2]
    else:
        keys.reverse()
    return {
        "Meta Data": {"1. Information": "Daily Prices", "2. Symbol": "TEST"},
        "Time Series (Daily)": {k: entries[k] for k in keys},
    }


Handler = Callable[[httpx.Request], Any]


@pytest.fixture
def settings() -> DashboardSettings:
    return DashboardSettings(api_key="test-key", base_url="https://provider.test/query")


@pytest.fixture
def make_client(settings: DashboardSettings) -> Callable[[Handler], AlphaVantageClient]:
    """Build a client whose HTTP calls are answered by `handler`."""

    def _make(handler: Handler) -> AlphaVantageClient:
        return AlphaVantageClient(settings, transport=httpx.MockTransport(handler))

    return _make
