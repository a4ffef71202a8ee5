"""
One aggregation run: load channels, crawl, bucket by day, merge and save.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from rss_archive.core.bucketizer import Bucketizer
from rss_archive.core.crawler import Crawler
from rss_archive.core.factories import create_bucketizer, create_crawler, create_loader, create_store
from rss_archive.core.fetcher import FetchStats
from rss_archive.core.loader import ChannelLoader
from rss_archive.core.store import DayStore
from rss_archive.logger import get_logger
from rss_archive.models import Day

logger = get_logger(__name__)


@dataclass
class RunSummary:
    """What one run ingested and wrote."""

    owners: int = 0
    urls: int = 0
    fetch_stats: FetchStats = field(default_factory=FetchStats)
    skipped_items: int = 0
    days: list[Day] = field(default_factory=list)

    @property
    def dates(self) -> list[str]:
        return [day.date for day in self.days]


class ArchivePipeline:
    """Wires the stages of a run together."""

    def __init__(
        self,
        items_dir: Union[str, Path],
        loader: Optional[ChannelLoader] = None,
        crawler: Optional[Crawler] = None,
        bucketizer: Optional[Bucketizer] = None,
        store: Optional[DayStore] = None,
    ):
        self.loader = loader or create_loader()
        self.crawler = crawler or create_crawler()
        self.bucketizer = bucketizer or create_bucketizer()
        self.store = store or create_store(items_dir)

    def run(self, channels_path: Union[str, Path]) -> RunSummary:
        """Run every stage; any surfaced error aborts the run.

        Args:
            channels_path: Fragment file or directory

        Returns:
            RunSummary of the run
        """
        groups = self.loader.load(channels_path)

        channels = self.crawler.crawl(groups)
        logger.opt(lazy=True).debug("Crawled channels:\n{}", self.crawler.dump)

        days = self.bucketizer.rearrange(channels)
        saved = self.store.save(days)

        summary = RunSummary(
            owners=len(groups),
            urls=sum(len(group.channels) for group in groups),
            fetch_stats=self.crawler.stats,
            skipped_items=self.bucketizer.skipped,
            days=saved,
        )

        logger.info(f"Run complete: {len(saved)} days written")
        return summary
