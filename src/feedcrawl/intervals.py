"""Duration strings: ``30s``, ``10m``, ``1h``."""

from __future__ import annotations

from datetime import timedelta

from feedcrawl.errors import IntervalErrorReason, InvalidIntervalFormat

UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 3600,
}

_ASCII_DIGITS = frozenset("0123456789")


def parse_interval(value: str) -> timedelta:
    """Parse ``<digits><unit>`` into a timedelta of whole seconds.

    Exactly one trailing unit is allowed. Signs, whitespace, fractions and
    combined units such as ``1h30m`` are rejected.
    """
    if not value:
        raise InvalidIntervalFormat(value, IntervalErrorReason.EMPTY)

    number, unit = value[:-1], value[-1]
    if unit not in UNIT_SECONDS:
        raise InvalidIntervalFormat(value, IntervalErrorReason.UNKNOWN_UNIT)

    # str.isdigit() also accepts non-ASCII digits like "²"
    if not number or not set(number) <= _ASCII_DIGITS:
        raise InvalidIntervalFormat(value, IntervalErrorReason.MALFORMED_NUMBER)

    try:
        return timedelta(seconds=int(number) * UNIT_SECONDS[unit])
    except (OverflowError, ValueError) as exc:
        raise InvalidIntervalFormat(value, IntervalErrorReason.MALFORMED_NUMBER) from exc
