from datetime import date
from enum import Enum

import polars as pl
from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- Constants & Schemas ---

# Polars schemas for the tabular views of quotes and price series
QUOTE_SCHEMA = {
    "symbol": pl.Utf8,
    "price": pl.Float64,
    "previous_price": pl.Float64,
    "change": pl.Float64,
    "change_percent": pl.Float64,
    "last_updated": pl.Utf8,
    "volume": pl.Int64,
    "error": pl.Boolean,
    "error_message": pl.Utf8,
}

PRICE_POINT_SCHEMA = {
    "date": pl.Utf8,
    "price": pl.Float64,
}

# Most recent trading days kept in a time series
SERIES_WINDOW = 30

FALLBACK_ERROR_MESSAGE = "Unable to fetch data"


# --- Enums ---


class SortKey(str, Enum):
    """Quote columns the table can be sorted by."""

    SYMBOL = "symbol"
    PRICE = "price"
    CHANGE_PERCENT = "change_percent"


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


# --- Domain Models ---


class Quote(BaseModel):
    """
    Latest snapshot of one symbol.

    A quote is either valid (`error` False, no message) or errored
    (`error` True, all numeric fields 0, non-empty `error_message`).
    Errored quotes represent provider soft errors such as throttling notes.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(min_length=1)
    price: float = Field(ge=0, allow_inf_nan=False)
    previous_price: float = Field(allow_inf_nan=False)
    change: float = Field(default=0.0, allow_inf_nan=False)
    change_percent: float = Field(allow_inf_nan=False)
    last_updated: str
    volume: int = Field(default=0, ge=0)

    error: bool = False
    error_message: str | None = None

    @model_validator(mode="after")
    def _check_state(self) -> "Quote":
        if self.error:
            if not self.error_message:
                raise ValueError("Errored quote requires an error message")
            numeric = (self.price, self.previous_price, self.change, self.change_percent)
            if any(v != 0 for v in numeric) or self.volume != 0:
                raise ValueError("Errored quote must have zeroed numeric fields")
        elif self.error_message is not None:
            raise ValueError("Valid quote must not carry an error message")
        return self

    @classmethod
    def errored(cls, symbol: str, message: str | None = None) -> "Quote":
        """Placeholder for a symbol the provider returned no usable quote for."""
        return cls(
            symbol=symbol,
            price=0.0,
            previous_price=0.0,
            change=0.0,
            change_percent=0.0,
            last_updated=date.today().isoformat(),
            volume=0,
            error=True,
            error_message=message or FALLBACK_ERROR_MESSAGE,
        )

    @property
    def is_gain(self) -> bool:
        return not self.error and self.change_percent >= 0


class PricePoint(BaseModel):
    """One trading day's closing price."""

    model_config = ConfigDict(frozen=True)

    date: str  # ISO format, YYYY-MM-DD
    price: float = Field(ge=0, allow_inf_nan=False)


class SortConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: SortKey | None = None
    direction: SortDirection = SortDirection.ASCENDING


class ViewState(BaseModel):
    """
    Per-session UI state. Mutated only by user interaction, never persisted.
    """

    search_term: str = ""
    sort: SortConfig = Field(default_factory=SortConfig)
    selected_symbol: str | None = None
