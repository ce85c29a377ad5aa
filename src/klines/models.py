"""Data models for klines and their CSV layout.

Prices and volumes stay as the decimal strings the exchange sent. They are
never parsed to float, so nothing is lost between the API and the file.
"""

from dataclasses import dataclass

from klines.exceptions import MalformedCandleError
from klines.timeutils import format_candle_time

# Positions inside a raw /api/v3/klines record
OPEN_TIME = 0
OPEN = 1
HIGH = 2
LOW = 3
CLOSE = 4
VOLUME = 5
CLOSE_TIME = 6

CSV_COLUMNS = (
    "openTime",
    "open",
    "high",
    "low",
    "close",
    "volume",
    "closeTime",
    "openISO",
    "closeISO",
)
CSV_HEADER = ",".join(CSV_COLUMNS)


@dataclass(frozen=True)
class Candle:
    """The retained fields of one raw kline record."""

    open_time: int
    open: str
    high: str
    low: str
    close: str
    volume: str
    close_time: int


@dataclass(frozen=True)
class EnrichedCandle(Candle):
    """A Candle plus ISO-8601 UTC renderings of its open and close times."""

    open_iso: str
    close_iso: str

    def to_row(self) -> str:
        """Render the candle as one CSV row in CSV_COLUMNS order."""
        return ",".join(
            (
                str(self.open_time),
                self.open,
                self.high,
                self.low,
                self.close,
                self.volume,
                str(self.close_time),
                self.open_iso,
                self.close_iso,
            )
        )


def _as_timestamp(value: object, field: str) -> int:
    # bool is an int subclass but never a valid timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedCandleError(f"{field} must be integer milliseconds, got {value!r}")
    return value


def map_raw_candle(raw: list) -> EnrichedCandle:
    """Map a raw kline record to an EnrichedCandle.

    Only positions 0-6 are read; trailing fields (quote volume, trade
    count, taker volumes, ignore) are dropped.

    Raises:
        MalformedCandleError: If the record is too short or its timestamps
            are not integers.
    """
    if not isinstance(raw, (list, tuple)) or len(raw) <= CLOSE_TIME:
        raise MalformedCandleError(f"Expected at least 7 kline fields, got {raw!r}")

    open_time = _as_timestamp(raw[OPEN_TIME], "openTime")
    close_time = _as_timestamp(raw[CLOSE_TIME], "closeTime")

    return EnrichedCandle(
        open_time=open_time,
        open=str(raw[OPEN]),
        high=str(raw[HIGH]),
        low=str(raw[LOW]),
        close=str(raw[CLOSE]),
        volume=str(raw[VOLUME]),
        close_time=close_time,
        open_iso=format_candle_time(open_time),
        close_iso=format_candle_time(close_time),
    )
