"""Conversions between epoch milliseconds and ISO-8601 UTC strings."""

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def from_epoch_ms(ts_ms: int) -> datetime:
    """Return the aware UTC datetime for an epoch-millisecond timestamp.

    Uses timedelta arithmetic rather than a float division so millisecond
    values survive exactly.
    """
    return _EPOCH + timedelta(milliseconds=ts_ms)


def to_epoch_ms(dt: datetime) -> int:
    """Return epoch milliseconds for an aware datetime."""
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def format_candle_time(ts_ms: int) -> str:
    """Format epoch milliseconds as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    iso = from_epoch_ms(ts_ms).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z")


def parse_start_date(value: str) -> datetime:
    """Parse an ISO-8601 UTC datetime string.

    Accepts a ``Z`` suffix or an explicit zero offset. Naive values and
    non-UTC offsets are rejected.

    Raises:
        ValueError: If the string is not an ISO-8601 UTC datetime.
    """
    text = value.strip()
    if "T" not in text:
        raise ValueError(f"START_DATE must be an ISO-8601 datetime, got {value!r}")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(text)
    except ValueError as e:
        raise ValueError(
            f"START_DATE must be an ISO-8601 datetime, got {value!r}"
        ) from e

    if dt.tzinfo is None or dt.utcoffset() != timedelta(0):
        raise ValueError(f"START_DATE must be in UTC, got {value!r}")
    return dt.astimezone(timezone.utc)
