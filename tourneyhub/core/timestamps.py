"""Normalisation of the timestamp representations found in Firestore documents.

Documents written by older admin tooling store ``updatedAt`` as a display
string such as ``"January 1, 2024 at 10:00:00 AM UTC+5"``. Newer writes store
native Firestore timestamps, which the Python client returns as timezone-aware
``datetime`` objects. Everything downstream works with aware ``datetime``
values produced by :func:`to_datetime`.
"""

from __future__ import annotations

import datetime
from typing import Any

from .constants import LEGACY_TIMESTAMP_SUFFIX, LEGACY_TIMEZONE

LEGACY_FORMATS = (
    "%b %d, %Y, %I:%M:%S %p",
    "%b %d, %Y, %H:%M:%S",
    "%B %d, %Y, %I:%M:%S %p",
    "%B %d, %Y, %H:%M:%S",
    "%B %d, %Y at %I:%M:%S %p",
    "%B %d, %Y at %H:%M:%S",
    "%b %d, %Y at %I:%M:%S %p",
    "%b %d, %Y %I:%M:%S %p",
    "%b %d, %Y %H:%M:%S",
    # toLocaleString("en-US") shapes
    "%m/%d/%Y, %I:%M:%S %p",
    "%m/%d/%Y, %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M:%S",
    # Minute precision
    "%b %d, %Y, %I:%M %p",
    "%b %d, %Y, %H:%M",
    "%B %d, %Y, %I:%M %p",
    "%B %d, %Y, %H:%M",
    "%B %d, %Y at %I:%M %p",
    "%b %d, %Y at %I:%M %p",
    "%m/%d/%Y, %I:%M %p",
    "%m/%d/%Y, %H:%M",
)


def utcnow() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def parse_legacy_timestamp(
    value: str, tz: datetime.tzinfo = LEGACY_TIMEZONE
) -> datetime.datetime | None:
    """Parse a display-string timestamp, returning ``None`` if it is unparseable.

    The ``" UTC+5"`` suffix is stripped and the remaining wall-clock time is
    read in ``tz``.
    """
    text = value.strip()
    if text.endswith(LEGACY_TIMESTAMP_SUFFIX.strip()):
        text = text[: -len(LEGACY_TIMESTAMP_SUFFIX.strip())].strip()
    if not text:
        return None

    try:
        parsed = datetime.datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None

    if parsed is None:
        for fmt in LEGACY_FORMATS:
            try:
                parsed = datetime.datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def to_datetime(
    value: Any, tz: datetime.tzinfo = LEGACY_TIMEZONE
) -> datetime.datetime | None:
    """Convert any stored timestamp representation to an aware datetime."""
    if value is None:
        return None
    if isinstance(value, str):
        return parse_legacy_timestamp(value, tz)
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=datetime.timezone.utc)
        return value
    if hasattr(value, "to_datetime"):  # Firestore Timestamp (proto based)
        return to_datetime(value.to_datetime(), tz)
    return None


def isoformat(value: Any) -> str | None:
    """Return an ISO-8601 string for a stored timestamp, or ``None``."""
    parsed = to_datetime(value)
    return parsed.isoformat() if parsed else None
