"""Custom exceptions for the candle exporter.

Kept in one module so the exchange client, mapping code and fetch loop
can share them without circular imports.
"""


class KlinesError(Exception):
    """Base exception for all exporter errors."""


class PageFetchError(KlinesError):
    """Raised when a single page of klines cannot be fetched or used.

    Covers transport failures, HTTP error statuses and malformed payloads
    alike. The fetch loop treats every one of them as "stop paging".
    """


class MalformedCandleError(PageFetchError):
    """Raised when a raw kline record does not have the expected layout."""
