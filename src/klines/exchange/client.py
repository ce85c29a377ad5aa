"""Abstract page fetcher interface.

The pagination loop depends only on this interface, keeping the
exchange-specific HTTP details in the concrete implementation and letting
tests drive the loop with deterministic fakes.
"""

from abc import ABC, abstractmethod


class PageFetcher(ABC):
    """Abstract base class for a paged klines source."""

    @abstractmethod
    async def fetch_klines(
        self,
        symbol: str,
        interval: str,
        start_time: int,
        limit: int,
    ) -> list[list]:
        """Fetch one page of raw kline records starting at start_time.

        Returns the records in ascending open-time order, at most ``limit``
        of them. An empty list means no data exists at or after start_time.

        Pagination is NOT handled here -- callers advance start_time
        between calls.

        Raises:
            PageFetchError: On any transport, HTTP or payload failure.
                Other exceptions are wrapped in PageFetchError by the
                fetch loop and end the run the same way.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
        ...
