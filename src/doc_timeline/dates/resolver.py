"""Resolve one timestamp per note.

Resolution cascade:
1. The configured frontmatter property, if present and a valid date
2. The creation time reported by the corpus
3. The current time

All timestamps are timezone-aware UTC. Naive values (YAML dates,
ISO strings without an offset) are taken to be UTC.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class DateSource(str, Enum):
    METADATA = "metadata"
    CREATED = "created"
    NOW = "now"


@dataclass(frozen=True)
class DateResolution:
    """The resolved timestamp and where it came from."""

    date: datetime
    source: DateSource


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date(value: Any) -> datetime | None:
    """Interpret a frontmatter value as a timestamp.

    Accepts datetime and date objects (as produced by YAML) and
    ISO-8601 strings. Anything else, including numbers and booleans,
    is rejected.

    Returns:
        A UTC datetime, or None if the value is not a valid date.
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def resolve_date(
    metadata: dict,
    date_property: str,
    created: datetime | None,
    now: Callable[[], datetime] | None = None,
) -> DateResolution:
    """Pick the timestamp for one note.

    Args:
        metadata: Parsed frontmatter (may be empty).
        date_property: Frontmatter key holding the date. Empty disables
            the frontmatter lookup.
        created: Creation time from the corpus, if known.
        now: Clock used for the last-resort fallback.

    Returns:
        The resolved timestamp and its source. Never raises on bad input.
    """
    if date_property and date_property in metadata:
        raw = metadata[date_property]
        parsed = parse_date(raw)
        if parsed is not None:
            return DateResolution(parsed, DateSource.METADATA)
        logger.warning(f"Unparseable {date_property!r} value {raw!r}, using the next date source")

    if created is not None:
        return DateResolution(_as_utc(created), DateSource.CREATED)

    clock = now or (lambda: datetime.now(timezone.utc))
    return DateResolution(_as_utc(clock()), DateSource.NOW)
