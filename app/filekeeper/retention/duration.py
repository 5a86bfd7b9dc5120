"""Retention period parsing.

Retention periods are written as a number followed by a unit, e.g.
``30d``, ``24h`` or ``90m``. Days are handled separately because the
standard duration grammar has no day unit; every other form follows
that grammar (``1h30m``, ``1.5h``, ``500ms``).
"""

import re
from datetime import timedelta

# Unit multipliers in microseconds (timedelta resolution)
_UNIT_MICROSECONDS: dict[str, float] = {
    "ns": 0.001,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1_000.0,
    "s": 1_000_000.0,
    "m": 60_000_000.0,
    "h": 3_600_000_000.0,
}

# One "<number><unit>" group; longer units first so "ms" wins over "m"
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_DAY_SUFFIX = "d"


class DurationError(ValueError):
    """Raised when a retention period cannot be parsed."""


def parse_duration(text: str) -> timedelta:
    """Parse a retention period into a timedelta.

    Args:
        text: Duration string such as "30d", "24h", "60m" or "1h30m".

    Returns:
        The parsed, non-negative duration.

    Raises:
        DurationError: If the string is empty, negative, has an unknown
            unit, has a malformed numeric part, or does not fit in a
            timedelta.
    """
    if not text:
        raise DurationError("invalid duration: empty string")

    if text.endswith(_DAY_SUFFIX):
        return _parse_days(text)

    return _parse_standard(text)


def _parse_days(text: str) -> timedelta:
    """Parse the "<n>d" form, where n is a non-negative integer."""
    value = text[: -len(_DAY_SUFFIX)]
    if not value.isascii() or not value.isdigit():
        raise DurationError(f"invalid day format: {text}")
    try:
        return timedelta(days=int(value))
    except OverflowError as e:
        raise DurationError(f"duration out of range: {text}") from e


def _parse_standard(text: str) -> timedelta:
    """Parse a sequence of "<decimal><unit>" groups."""
    body = text
    if body.startswith("-"):
        raise DurationError(f"invalid duration: negative value {text!r}")
    if body.startswith("+"):
        body = body[1:]

    if body == "0":
        return timedelta(0)
    if not body:
        raise DurationError(f"invalid duration: {text!r}")

    total = 0.0
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if match is None:
            raise DurationError(f"invalid duration: {text!r}")
        number, unit = match.groups()
        total += float(number) * _UNIT_MICROSECONDS[unit]
        pos = match.end()

    try:
        return timedelta(microseconds=total)
    except OverflowError as e:
        raise DurationError(f"duration out of range: {text!r}") from e
