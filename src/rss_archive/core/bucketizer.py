"""
Re-buckets channel-centric crawl output into date-centric days.

Every item lands under (day, owner, channel title). Within a channel, items
are unique by title and the first occurrence wins.
"""

from typing import Iterable, Optional

from rss_archive.core.dates import DateNormalizer
from rss_archive.errors import DateParseError, NilInputError
from rss_archive.logger import get_logger
from rss_archive.models import ArchivedItem, Day, DayChannel, FeedChannel, Owner

logger = get_logger(__name__)


class DayBuilder:
    """Locate-or-create accumulator for days, owners, channels and items.

    ``days`` keeps the nested shape in first-seen order; the dictionaries
    index it so that each insertion is a constant number of lookups.
    """

    def __init__(self):
        self.days: list[Day] = []
        self._days: dict[str, Day] = {}
        self._owners: dict[tuple[str, str], Owner] = {}
        self._channels: dict[tuple[str, str, str], DayChannel] = {}
        self._titles: dict[tuple[str, str, str], set[str]] = {}

    def add_item(
        self,
        item: ArchivedItem,
        date: str,
        owner_id: str,
        channel_title: str,
        channel_desc: str,
    ) -> bool:
        """Add ``item`` under (date, owner, channel).

        The channel description is only used when the channel is created.

        Returns:
            False if the channel already held an item with that title
        """
        day = self._days.get(date)
        if day is None:
            day = Day(date=date)
            self._days[date] = day
            self.days.append(day)

        owner_key = (date, owner_id)
        owner = self._owners.get(owner_key)
        if owner is None:
            owner = Owner(id=owner_id)
            self._owners[owner_key] = owner
            day.owners.append(owner)

        channel_key = (date, owner_id, channel_title)
        channel = self._channels.get(channel_key)
        if channel is None:
            channel = DayChannel(title=channel_title, desc=channel_desc)
            self._channels[channel_key] = channel
            self._titles[channel_key] = set()
            owner.channels.append(channel)

        titles = self._titles[channel_key]
        if item.title in titles:
            return False

        titles.add(item.title)
        channel.items.append(item)
        return True


class Bucketizer:
    """Turns crawled channels into a list of days."""

    def __init__(self, normalizer: Optional[DateNormalizer] = None):
        self.normalizer = normalizer or DateNormalizer()
        self.builder = DayBuilder()
        self.skipped = 0

    @property
    def days(self) -> list[Day]:
        return self.builder.days

    def rearrange(self, channels: Optional[Iterable[FeedChannel]]) -> list[Day]:
        """Bucket every item of every channel by its UTC publication day.

        Items whose date cannot be parsed are skipped.

        Raises:
            NilInputError: No channels were given
        """
        if channels is None:
            raise NilInputError("Channels are missing")

        for channel in channels:
            for feed_item in channel.items:
                try:
                    day = self.normalizer.normalize(feed_item.date).day
                except DateParseError as e:
                    self.skipped += 1
                    logger.debug(f"Skipping item {feed_item.title!r}: {e}")
                    continue

                item = ArchivedItem(title=feed_item.title, link=feed_item.link, desc=feed_item.desc)
                self.builder.add_item(item, day, channel.owner or "", channel.title, channel.desc)

        if self.skipped:
            logger.warning(f"Skipped {self.skipped} items with unparseable dates")

        return self.days
