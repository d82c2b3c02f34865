"""Minute-of-day encoding for ``HH:MM`` wall-clock strings."""

from __future__ import annotations

import re

MINUTES_PER_DAY = 24 * 60

_HHMM = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def parse_time(value: str) -> int:
    """Convert ``"HH:MM"`` (24-hour) to minutes since midnight.

    A single-digit hour (``"9:30"``) is accepted. Raises ``ValueError`` for
    anything else.
    """
    m = _HHMM.match(value.strip())
    if m is None:
        raise ValueError(f"time must be HH:MM (24-hour), got {value!r}")
    return int(m.group(1)) * 60 + int(m.group(2))


def format_time(minutes: int) -> str:
    """Inverse of :func:`parse_time` for values inside a single day."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minute-of-day out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time(value: str) -> str:
    """Return the canonical zero-padded form of an ``HH:MM`` string."""
    return format_time(parse_time(value))
