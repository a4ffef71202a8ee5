"""
Feed crawler: fetches every configured URL and accumulates the channels.

The accumulator is channel-centric and keeps duplicates: the same channel
title fetched for two owners stays two entries.
"""

from typing import Iterable, Optional

from rss_archive.core.fetcher import FeedFetcher, FetchResult, FetchStats
from rss_archive.errors import NilInputError
from rss_archive.logger import get_logger
from rss_archive.models import ChannelGroup, FeedChannel

logger = get_logger(__name__)


class Crawler:
    """Accumulates fetched channels across all configured URLs."""

    def __init__(self, fetcher: Optional[FeedFetcher] = None):
        """Initialize crawler.

        Args:
            fetcher: Fetcher used for every URL
        """
        self.fetcher = fetcher or FeedFetcher()
        self.channels: list[FeedChannel] = []
        self.stats = FetchStats()

    def crawl(self, channel_groups: Optional[Iterable[ChannelGroup]]) -> list[FeedChannel]:
        """Fetch every URL of every group, in order.

        A URL that fails to fetch or decode is logged and skipped.

        Args:
            channel_groups: Merged channel groups

        Returns:
            The accumulated channels, whitespace-trimmed

        Raises:
            NilInputError: No channel groups were given
        """
        if channel_groups is None:
            raise NilInputError("Channel groups are missing")

        for group in channel_groups:
            for url in group.channels:
                result = self.fetcher.fetch(url)
                self.stats.add_result(result)

                if not result.success:
                    logger.warning(f"Skipping {url}: {result.error}")
                    continue

                self.merge(result, group.owner)

        self.clean()

        logger.info(
            f"Crawled {self.stats.total_urls} urls "
            f"({self.stats.successful_fetches} ok, {self.stats.failed_fetches} failed), "
            f"{self.stats.total_items} items in {len(self.channels)} channels"
        )
        if self.stats.errors_by_type:
            logger.info(f"Failures by type: {self.stats.errors_by_type}")

        return self.channels

    def merge(self, result: FetchResult, owner: str) -> None:
        """Tag the result's channels with ``owner`` and append them."""
        for channel in result.channels:
            channel.owner = owner
        self.channels.extend(result.channels)

    def clean(self) -> None:
        """Trim surrounding whitespace from every text field."""
        for channel in self.channels:
            channel.strip()

    def dump(self) -> str:
        """Render the accumulated channels as text, for debugging."""
        lines = []
        for channel in self.channels:
            lines.append(f"Title: @{channel.title}@")
            lines.append(f"Desc:  @{channel.desc}@")
            for idx, item in enumerate(channel.items):
                lines.append(f"\t{idx:2d} Title: @{item.title}@")
                lines.append(f"\t{idx:2d} Link:  @{item.link}@")
                lines.append(f"\t{idx:2d} Desc:  @{item.desc}@")
        return "\n".join(lines) + ("\n" if lines else "")
