"""Binance spot klines client via ccxt async.

Wraps ccxt.async_support.binance and calls its implicit endpoint for

    GET https://api.binance.com/api/v3/klines
        ?symbol=BTCUSDT&interval=1m&startTime=...&limit=1000

so the raw positional records come back untouched (ccxt's unified
fetch_ohlcv would cast prices to float and drop close time).
"""

import ccxt.async_support as ccxt_async

from klines.exceptions import PageFetchError
from klines.exchange.client import PageFetcher
from klines.logging import get_logger

logger = get_logger(__name__)


class BinanceClient(PageFetcher):
    """Concrete Binance spot page fetcher using ccxt async."""

    def __init__(self, exchange: ccxt_async.binance | None = None) -> None:
        self._exchange = exchange or ccxt_async.binance({"enableRateLimit": True})

    @property
    def exchange(self) -> ccxt_async.binance:
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def fetch_klines(
        self,
        symbol: str,
        interval: str,
        start_time: int,
        limit: int,
    ) -> list[list]:
        """Fetch one page from /api/v3/klines.

        Every ccxt failure (network, timeout, 4xx/5xx, bad symbol) is
        wrapped in PageFetchError, as is a response that is not a JSON array.
        """
        params = {
            "symbol": symbol,
            "interval": interval,
            "startTime": start_time,
            "limit": limit,
        }
        logger.debug("requesting_klines", **params)

        try:
            raw = await self._exchange.public_get_klines(params)
        except ccxt_async.BaseError as e:
            raise PageFetchError(
                f"klines request failed for {symbol} {interval} at {start_time}: {e}"
            ) from e

        if not isinstance(raw, list):
            raise PageFetchError(
                f"Expected a JSON array of klines, got {type(raw).__name__}"
            )
        return raw

    async def close(self) -> None:
        """Clean up ccxt async resources. Must be called to avoid leaking the aiohttp session."""
        await self._exchange.close()
        logger.debug("binance_connection_closed")
