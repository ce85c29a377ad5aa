"""Paginated kline fetch loop with stop-on-error and a single final write.

Walks forward from START_DATE in pages of LIMIT candles, using the last
candle of each page to compute the next page's startTime, until the
exchange returns an empty or short page.

Implementation notes:
- Next cursor is last close_time + 1. Without the +1 the last candle of a
  page is fetched again as the first candle of the next one.
- Short page means len(page) < requested limit, not a running total.
- A failed page is NOT retried. It ends the run, and whatever was already
  collected is still written.
- The inter-request delay only runs when another request follows.
"""

import asyncio
import time

from klines.config import AppSettings
from klines.exceptions import PageFetchError
from klines.exchange.client import PageFetcher
from klines.logging import get_logger
from klines.models import EnrichedCandle, map_raw_candle
from klines.sink import CandleSink

logger = get_logger(__name__)


class CandleFetcher:
    """Fetches every candle from the configured start and hands them to a sink.

    Usage:
        fetcher = CandleFetcher(exchange, CsvCandleSink(path), settings)
        candles = await fetcher.fetch_all()
    """

    def __init__(
        self,
        exchange: PageFetcher,
        sink: CandleSink,
        settings: AppSettings,
    ) -> None:
        self._exchange = exchange
        self._sink = sink
        self._settings = settings

        self.cursor: int = settings.start_time_ms
        self.pages_fetched: int = 0
        self.last_error: PageFetchError | None = None

    async def fetch_all(self) -> list[EnrichedCandle]:
        """Fetch all pages, write them to the sink once, and return them.

        Returns a partial sequence when a page fails. Sink errors propagate.
        """
        start = time.monotonic()
        symbol = self._settings.symbol
        interval = self._settings.interval
        limit = self._settings.limit
        delay = self._settings.req_delay_ms / 1000

        self.cursor = self._settings.start_time_ms
        self.pages_fetched = 0
        self.last_error = None
        candles: list[EnrichedCandle] = []

        logger.info(
            "fetching_candles",
            symbol=symbol,
            interval=interval,
            start_date=self._settings.start_date,
            limit=limit,
        )

        while True:
            try:
                raw_page = await self._exchange.fetch_klines(
                    symbol, interval, start_time=self.cursor, limit=limit
                )
                page = [map_raw_candle(raw) for raw in raw_page]
            except Exception as e:
                # Every page failure ends the run the same way
                error = e
                if not isinstance(error, PageFetchError):
                    error = PageFetchError(f"page request failed: {e!r}")
                    error.__cause__ = e
                logger.error(
                    "page_fetch_failed",
                    symbol=symbol,
                    cursor=self.cursor,
                    page=self.pages_fetched + 1,
                    error=str(error),
                )
                self.last_error = error
                break

            if not page:
                break

            candles.extend(page)
            self.pages_fetched += 1
            self.cursor = page[-1].close_time + 1

            logger.debug(
                "page_fetched",
                page=self.pages_fetched,
                size=len(page),
                first_open=page[0].open_iso,
                last_close=page[-1].close_iso,
                total=len(candles),
            )

            if len(raw_page) < limit:
                break

            await asyncio.sleep(delay)

        self._sink.write(candles)

        duration = time.monotonic() - start
        logger.info(
            "fetch_complete",
            symbol=symbol,
            candles=len(candles),
            pages=self.pages_fetched,
            stopped_on_error=self.last_error is not None,
            duration_seconds=round(duration, 3),
        )
        return candles
