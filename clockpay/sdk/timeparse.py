"""Duration and timestamp parsing for time-clock exports.

The clock exports durations as "<H>h <M>m" text ("8h 15m", "8h", "45m")
and timestamps as day/month/year with a 24-hour time ("25/7/2025 14:05").
"""

import re
from datetime import datetime

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M"

# Stand-in for timestamps the clock exported in an unreadable form.
ZERO_TIMESTAMP = datetime.min

_TOKEN_RE = re.compile(r"^(?P<value>.*?)(?P<unit>[hm])$")
_UNIT_ORDER = {"h": 0, "m": 1}
_DIGITS_RE = re.compile(r"[0-9]+")


class ParseError(ValueError):
    """Raised when a duration token cannot be read."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot parse duration '{text}': {reason}")


def parse_duration(text: str) -> int:
    """Convert a duration token like "8h 15m" to whole minutes.

    Either token may be omitted, but hours always come before minutes.
    An empty (or all-whitespace) string is zero minutes.

    Args:
        text: Duration text from the export

    Returns:
        Minutes as a non-negative integer

    Raises:
        ParseError: If a token is malformed, repeated or out of order
    """
    if text is None:
        return 0

    tokens = text.split()
    if len(tokens) > 2:
        raise ParseError(text, "expected at most an hours and a minutes token")

    parts = {"h": 0, "m": 0}
    last_order = -1
    for token in tokens:
        match = _TOKEN_RE.match(token)
        if not match:
            raise ParseError(text, f"token '{token}' has no 'h' or 'm' unit")

        unit = match.group("unit")
        value = match.group("value")
        if _UNIT_ORDER[unit] <= last_order:
            raise ParseError(text, "hours must come before minutes, each at most once")
        last_order = _UNIT_ORDER[unit]

        if not _DIGITS_RE.fullmatch(value):
            raise ParseError(text, f"'{value}' is not a whole number")
        parts[unit] = int(value)

    return parts["h"] * 60 + parts["m"]


def parse_timestamp(text: str) -> datetime:
    """Parse a clock timestamp, falling back to ZERO_TIMESTAMP.

    Zero padding is optional ("2/1/2006 15:04" and "02/01/2006 15:04"
    are the same instant).
    """
    try:
        return datetime.strptime((text or "").strip(), TIMESTAMP_FORMAT)
    except ValueError:
        return ZERO_TIMESTAMP


def is_zero_timestamp(value: datetime) -> bool:
    return value == ZERO_TIMESTAMP


def format_minutes(minutes: float) -> str:
    """Render minutes back in the clock's own "8h 15m" notation."""
    total = int(round(minutes))
    sign = "-" if total < 0 else ""
    hours, mins = divmod(abs(total), 60)
    if hours and mins:
        return f"{sign}{hours}h {mins}m"
    if hours:
        return f"{sign}{hours}h"
    return f"{sign}{mins}m"
