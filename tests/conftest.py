"""Shared test fixtures and fakes for the candle exporter."""

from collections.abc import Sequence

import pytest

from klines.config import AppSettings
from klines.exchange.client import PageFetcher
from klines.models import EnrichedCandle
from klines.sink import CandleSink

ENV_KEYS = (
    "SYMBOL",
    "INTERVAL",
    "LIMIT",
    "REQ_DELAY_MS",
    "START_DATE",
    "OUTPUT_FILE",
    "LOG_LEVEL",
    "LOG_FORMAT",
)

VALID_ENV = {
    "SYMBOL": "BTCUSDT",
    "INTERVAL": "1m",
    "LIMIT": "3",
    "REQ_DELAY_MS": "10",
    "START_DATE": "2024-01-01T00:00:00.000Z",
    "OUTPUT_FILE": "out/candles.csv",
}

# 2024-01-01T00:00:00Z
START_MS = 1_704_067_200_000
MINUTE_MS = 60_000


def make_raw(open_time: int, step: int = MINUTE_MS) -> list:
    """Build one 12-field raw kline record as Binance returns it."""
    return [
        open_time,
        "42000.10",
        "42100.00",
        "41950.50",
        "42050.25",
        "12.345",
        open_time + step - 1,
        "519000.00",
        150,
        "6.1",
        "256000.00",
        "0",
    ]


def make_page(start: int, count: int, step: int = MINUTE_MS) -> list[list]:
    """Build ``count`` contiguous raw records starting at ``start``."""
    return [make_raw(start + i * step, step) for i in range(count)]


class FakePageFetcher(PageFetcher):
    """Serves scripted pages in order and records every request.

    Each scripted item is a list of raw records or an exception to raise.
    """

    def __init__(self, pages: Sequence[list | Exception]) -> None:
        self._pages = list(pages)
        self.calls: list[dict] = []
        self.closed = False

    async def fetch_klines(
        self, symbol: str, interval: str, start_time: int, limit: int
    ) -> list[list]:
        self.calls.append(
            {
                "symbol": symbol,
                "interval": interval,
                "start_time": start_time,
                "limit": limit,
            }
        )
        if not self._pages:
            return []
        item = self._pages.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


class RecordingSink(CandleSink):
    """Keeps every write in memory."""

    def __init__(self) -> None:
        self.writes: list[list[EnrichedCandle]] = []

    def write(self, candles: Sequence[EnrichedCandle]) -> None:
        self.writes.append(list(candles))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Clear exporter env vars and run from an empty directory (no stray .env)."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def valid_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Populate the environment with a valid configuration."""
    for key, value in VALID_ENV.items():
        monkeypatch.setenv(key, value)
    return dict(VALID_ENV)


@pytest.fixture
def settings() -> AppSettings:
    """AppSettings with a page size of 3 and a short delay."""
    return AppSettings(
        symbol="BTCUSDT",
        interval="1m",
        limit=3,
        req_delay_ms=10,
        start_date="2024-01-01T00:00:00Z",
        output_file="candles.csv",
    )
