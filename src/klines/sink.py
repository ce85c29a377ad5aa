"""Candle sinks: where a finished run's candles are written."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from klines.logging import get_logger
from klines.models import CSV_HEADER, EnrichedCandle

logger = get_logger(__name__)


class CandleSink(ABC):
    """Accepts the full candle sequence of a run in a single write."""

    @abstractmethod
    def write(self, candles: Sequence[EnrichedCandle]) -> None:
        """Durably persist candles. Errors propagate to the caller."""
        ...


class CsvCandleSink(CandleSink):
    """Writes candles to a comma-delimited UTF-8 file.

    The file is created or overwritten wholesale: a header line, then one
    row per candle joined by newlines, no trailing newline, no quoting
    (no field can contain a comma).
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, candles: Sequence[EnrichedCandle]) -> None:
        rows = "\n".join(candle.to_row() for candle in candles)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(f"{CSV_HEADER}\n{rows}", encoding="utf-8")
        logger.info("candles_saved", count=len(candles), path=str(self._path))
