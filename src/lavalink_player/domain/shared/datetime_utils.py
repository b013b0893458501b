"""Date/time helpers.

All timestamps kept by a player are timezone-aware UTC datetimes. The node
reports its own clock as unix milliseconds, so conversions live here too.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Preferred replacement for `datetime.now(UTC)`.

    Returns a timezone-aware datetime in UTC.
    """
    return datetime.now(UTC)


def from_unix_millis(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=UTC)
