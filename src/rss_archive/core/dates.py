"""
Publication date normalization.

RSS ``<pubDate>`` values are RFC 1123 timestamps whose zone is either a
numeric offset (``Tue, 19 Apr 2016 17:25:18 +0000``) or an abbreviation
(``Tue, 19 Apr 2016 17:25:18 EDT``). Abbreviations are ambiguous, so they are
resolved through an explicit abbreviation -> IANA zone table.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rss_archive.config import get_config
from rss_archive.errors import FormatError, UnknownTimezoneError

NUMERIC_OFFSET = re.compile(r"[+-]\d{4}")
ABBREVIATION = re.compile(r"[A-Z]+")

# RFC 1123 with numeric zone, and without zone
NUMERIC_LAYOUT = "%a, %d %b %Y %H:%M:%S %z"
NAMED_LAYOUT = "%a, %d %b %Y %H:%M:%S"


def utc_day(timestamp: datetime) -> str:
    """Format the UTC calendar day of ``timestamp`` as ``YYYY-M-D`` (no padding)."""
    utc = timestamp.astimezone(timezone.utc)
    return f"{utc.year}-{utc.month}-{utc.day}"


def abbreviation_offset(zone: ZoneInfo, abbreviation: str, year: int) -> Optional[timedelta]:
    """Find the UTC offset ``zone`` observes under ``abbreviation`` during ``year``."""
    start = datetime(year, 1, 1, 12, tzinfo=zone)
    for days in range(0, 366, 7):
        sample = start + timedelta(days=days)
        if sample.tzname() == abbreviation:
            return sample.utcoffset()
    return None


def localize(naive: datetime, zone: ZoneInfo, abbreviation: str) -> datetime:
    """Attach ``zone`` to a wall-clock time written with ``abbreviation``.

    The abbreviation decides the offset: ``EDT`` is -04:00 even on a January
    date, when America/New_York itself observes EST. An abbreviation the zone
    never uses in that year falls back to the zone's own offset.

    Args:
        naive: Wall-clock time without tzinfo
        zone: Zone the abbreviation was registered for
        abbreviation: Zone designator as written in the date

    Returns:
        Timezone-aware datetime
    """
    for fold in (0, 1):
        candidate = naive.replace(tzinfo=zone, fold=fold)
        if candidate.tzname() == abbreviation:
            return candidate

    offset = abbreviation_offset(zone, abbreviation, naive.year)
    if offset is None:
        return naive.replace(tzinfo=zone)
    return naive.replace(tzinfo=timezone(offset, abbreviation))


@dataclass(frozen=True)
class NormalizedDate:
    """A parsed publication date and the day bucket it belongs to."""

    timestamp: datetime
    day: str


class DateNormalizer:
    """Parses feed publication dates into timezone-aware timestamps."""

    def __init__(self, timezone_abbreviations: Optional[Mapping[str, str]] = None):
        """Initialize date normalizer.

        Args:
            timezone_abbreviations: Abbreviation -> IANA zone name; defaults to
                the configured table
        """
        if timezone_abbreviations is None:
            timezone_abbreviations = get_config().dates.timezone_abbreviations
        self.timezone_abbreviations = dict(timezone_abbreviations)

    def parse(self, raw: str) -> datetime:
        """Parse a publication date.

        Args:
            raw: Date string as found in the feed

        Returns:
            Timezone-aware datetime

        Raises:
            FormatError: The string or its zone designator is malformed
            UnknownTimezoneError: The zone abbreviation is not registered
        """
        parts = re.split(r"\s", raw)
        if len(parts) == 1:
            raise FormatError(f"Date {raw!r} has no timezone designator")

        designator = parts[-1]
        if not designator:
            raise FormatError(f"Date {raw!r} ends with whitespace")

        if NUMERIC_OFFSET.fullmatch(designator):
            try:
                return datetime.strptime(raw, NUMERIC_LAYOUT)
            except ValueError as e:
                raise FormatError(f"Date {raw!r} has wrong format: {e}") from e

        if not ABBREVIATION.fullmatch(designator):
            raise FormatError(f"Time zone {designator!r} has wrong format")

        zone = self._zone(designator)
        head = raw[: len(raw) - len(designator)].rstrip()
        try:
            parsed = datetime.strptime(head, NAMED_LAYOUT)
        except ValueError as e:
            raise FormatError(f"Date {raw!r} has wrong format: {e}") from e

        return localize(parsed, zone, designator)

    def normalize(self, raw: str) -> NormalizedDate:
        """Parse ``raw`` and compute its UTC day bucket."""
        timestamp = self.parse(raw)
        return NormalizedDate(timestamp=timestamp, day=utc_day(timestamp))

    def _zone(self, abbreviation: str) -> ZoneInfo:
        name = self.timezone_abbreviations.get(abbreviation)
        if name is None:
            raise UnknownTimezoneError(abbreviation)
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise UnknownTimezoneError(abbreviation) from e
