"""Exchange client layer -- Binance klines via ccxt."""

from klines.exchange.binance_client import BinanceClient
from klines.exchange.client import PageFetcher

__all__ = ["BinanceClient", "PageFetcher"]
