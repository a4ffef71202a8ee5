"""
Day record storage.

For each day, the previously persisted record (if any) is loaded, the new
content is merged into it, the result is put in canonical order and written
back to a file named after the date.

Merging never overwrites: owners, channels and items already on disk are
kept as they are, and only missing ones are added.
"""

from pathlib import Path
from typing import Iterable, Union

from pydantic import ValidationError

from rss_archive.errors import RecordDecodeError, RecordReadError, RecordWriteError
from rss_archive.logger import get_logger
from rss_archive.models import ArchivedItem, Day, DayChannel, Owner

logger = get_logger(__name__)


def merge_days(src: Day, dest: Day) -> Day:
    """Merge ``src`` into a copy of ``dest``.

    Neither argument is modified and the result shares no objects with them.
    """
    merged = dest.model_copy(deep=True)
    merge_owners(src.owners, merged.owners)
    return merged


def merge_owners(src: list[Owner], dest: list[Owner]) -> None:
    by_id = {owner.id: owner for owner in dest}
    for owner in src:
        existing = by_id.get(owner.id)
        if existing is None:
            copy = owner.model_copy(deep=True)
            dest.append(copy)
            by_id[owner.id] = copy
        else:
            merge_channels(owner.channels, existing.channels)


def merge_channels(src: list[DayChannel], dest: list[DayChannel]) -> None:
    by_title = {channel.title: channel for channel in dest}
    for channel in src:
        existing = by_title.get(channel.title)
        if existing is None:
            copy = channel.model_copy(deep=True)
            dest.append(copy)
            by_title[channel.title] = copy
        else:
            merge_items(channel.items, existing.items)


def merge_items(src: list[ArchivedItem], dest: list[ArchivedItem]) -> None:
    # first write wins per title
    titles = {item.title for item in dest}
    for item in src:
        if item.title not in titles:
            dest.append(item.model_copy())
            titles.add(item.title)


class DayStore:
    """Loads, merges and writes day records in one directory."""

    def __init__(self, directory: Union[str, Path]):
        """Initialize day store.

        Args:
            directory: Directory holding one record file per date
        """
        self.directory = Path(directory)

    def path_for(self, date: str) -> Path:
        return self.directory / date

    def load(self, date: str) -> Day:
        """Load the record for ``date``, or an empty day if there is none.

        Raises:
            RecordReadError: The record exists but cannot be read
            RecordDecodeError: The record is not a valid day
        """
        path = self.path_for(date)
        if not path.exists():
            return Day(date=date)

        try:
            content = path.read_bytes()
        except OSError as e:
            raise RecordReadError(f"Unable to read '{path}': {e}", path=path) from e

        try:
            day = Day.model_validate_json(content)
        except ValidationError as e:
            raise RecordDecodeError(f"Unable to decode '{path}': {e}", path=path) from e

        if day.date != date:
            logger.warning(f"Record '{path}' is dated {day.date!r}, using {date!r}")
            day.date = date

        return day

    def write(self, day: Day) -> Path:
        """Serialize ``day`` to its file, replacing any previous content.

        Raises:
            RecordWriteError: The file cannot be written
        """
        path = self.path_for(day.date)
        try:
            path.write_text(day.model_dump_json(), encoding="utf-8")
        except OSError as e:
            raise RecordWriteError(f"Unable to write to '{path}': {e}", path=path) from e
        return path

    def save_day(self, day: Day) -> Day:
        """Merge ``day`` with its persisted record and write the result.

        Returns:
            The merged, canonically sorted day as written
        """
        persisted = self.load(day.date)
        merged = merge_days(day, persisted)
        merged.sort()
        self.write(merged)

        logger.info(
            f"Saved {day.date}: {merged.item_count} items "
            f"({merged.item_count - persisted.item_count} new)"
        )
        return merged

    def save(self, days: Iterable[Day]) -> list[Day]:
        """Save every day in turn.

        The first failure aborts the remaining days.

        Returns:
            The merged days, in input order
        """
        return [self.save_day(day) for day in days]
