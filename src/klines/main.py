"""Entry point for the candle exporter.

Wires the components together and runs one export:

1. AppSettings (validated before any network activity)
2. Logging setup
3. PageFetcher (BinanceClient unless one is injected)
4. CsvCandleSink at OUTPUT_FILE
5. CandleFetcher, which pages through the API and writes the file once

Invalid configuration exits with status 1 and the field errors on stderr.
"""

import asyncio
import sys

from pydantic import ValidationError

from klines.config import AppSettings
from klines.exchange.binance_client import BinanceClient
from klines.exchange.client import PageFetcher
from klines.fetcher import CandleFetcher
from klines.logging import get_logger, setup_logging
from klines.sink import CandleSink, CsvCandleSink


def load_settings() -> AppSettings:
    """Load settings, exiting the process with status 1 if they are invalid."""
    try:
        return AppSettings()
    except ValidationError as e:
        print("Invalid environment variables", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"]).upper()
            print(f"  {field}: {error['msg']}", file=sys.stderr)
        raise SystemExit(1) from e


async def run(
    settings: AppSettings | None = None,
    exchange: PageFetcher | None = None,
    sink: CandleSink | None = None,
) -> None:
    """Run one export.

    Settings are loaded from the environment when not given. ``exchange``
    and ``sink`` default to Binance and a CSV file at OUTPUT_FILE; passing
    them in lets callers substitute fakes.
    """
    # 1. Load settings (exits before anything else on failure)
    if settings is None:
        settings = load_settings()

    # 2. Setup logging
    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("klines.main")

    # 3-4. Build collaborators
    if exchange is None:
        exchange = BinanceClient()
    if sink is None:
        sink = CsvCandleSink(settings.output_path)

    # 5. Fetch and write
    fetcher = CandleFetcher(exchange, sink, settings)
    try:
        await fetcher.fetch_all()
    finally:
        await exchange.close()

    logger.info("export_finished", output=str(settings.output_path))


def main() -> None:
    """Synchronous entry point."""
    settings = load_settings()
    try:
        asyncio.run(run(settings))
    except Exception as e:
        get_logger("klines.main").exception("fatal_error", error=str(e))
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
