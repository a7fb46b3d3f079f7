"""Configuration management for the Stock Dashboard.

Centralizes provider settings and the tracked symbol universe.
"""

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYMBOLS = ["AAPL", "MSFT", "GOOGL", "AMZN", "META"]


class DashboardSettings(BaseSettings):
    """Provider and request settings, read from the environment or `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ALPHA_VANTAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="demo", description="Alpha Vantage API key")
    base_url: str = Field(
        default="https://www.alphavantage.co/query", description="Query endpoint"
    )
    request_timeout: float = Field(default=10.0, description="Per-request timeout in seconds")
    series_window: int = Field(default=30, gt=0, description="Trading days kept for the chart")
    series_output_size: str = Field(default="compact", description="Daily series size mode")


class UniverseConfig(BaseModel):
    """Symbols shown in the quote table."""

    symbols: list[str] = Field(default_factory=lambda: list(DEFAULT_SYMBOLS))

    @field_validator("symbols")
    @classmethod
    def _normalize_symbols(cls, value: list[str]) -> list[str]:
        symbols = [s.strip().upper() for s in value if s and s.strip()]
        if not symbols:
            raise ValueError("Symbol universe must not be empty")
        return symbols


class Config(BaseModel):
    """Root configuration model."""

    universe: UniverseConfig = Field(default_factory=UniverseConfig)
    settings: DashboardSettings = Field(default_factory=DashboardSettings)

    @property
    def symbols(self) -> list[str]:
        return self.universe.symbols


def load_config(config_path: Path = Path("config/config.yaml")) -> Config:
    """Load configuration from an optional YAML file.

    Args:
        config_path: Path to the YAML file with a `universe` section

    Returns:
        Parsed configuration object. Defaults are used if the file is missing.

    Raises:
        yaml.YAMLError: If config file is malformed
    """
    if not config_path.exists():
        logger.info(f"No configuration file at {config_path}, using default symbols")
        return Config()

    logger.info(f"Loading configuration from {config_path}")

    with config_path.open("r") as f:
        raw_config: dict[str, Any] = yaml.safe_load(f) or {}

    config = Config(universe=UniverseConfig(**(raw_config.get("universe") or {})))
    logger.debug(f"Tracking {len(config.symbols)} symbols: {config.symbols}")

    return config
