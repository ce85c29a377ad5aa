"""Configuration system using pydantic-settings with environment variable loading."""

from datetime import datetime
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from klines.timeutils import parse_start_date, to_epoch_ms

# Binance spot caps /api/v3/klines at 1000 records per request
MAX_PAGE_LIMIT = 1000


class AppSettings(BaseSettings):
    """Settings for a single candle export run.

    Read from the process environment and an optional ``.env`` file in the
    working directory. Keys are unprefixed (SYMBOL, INTERVAL, LIMIT, ...).
    Construction raises ``pydantic.ValidationError`` when any key is missing
    or invalid, before anything touches the network.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    symbol: str = Field(min_length=1)
    interval: str = Field(min_length=1)
    limit: int = Field(gt=0, le=MAX_PAGE_LIMIT)
    req_delay_ms: int = Field(gt=0)
    start_date: str
    output_file: str = Field(min_length=1)

    @field_validator("start_date")
    @classmethod
    def _check_start_date(cls, value: str) -> str:
        parse_start_date(value)
        return value

    @property
    def start_datetime(self) -> datetime:
        """START_DATE as an aware UTC datetime."""
        return parse_start_date(self.start_date)

    @property
    def start_time_ms(self) -> int:
        """START_DATE as epoch milliseconds, the first page cursor."""
        return to_epoch_ms(self.start_datetime)

    @property
    def output_path(self) -> Path:
        """OUTPUT_FILE resolved against the current working directory."""
        return Path.cwd() / self.output_file
