"""Core pipeline stages for RSS Archive.

    from rss_archive.core import ArchivePipeline

    summary = ArchivePipeline("data/items").run("data/channels")

Stages, in run order:
    - ChannelLoader: reads and merges channel configuration fragments
    - Crawler: fetches every configured feed into channel records
    - Bucketizer: re-buckets items by UTC publication day
    - DayStore: merges each day with its persisted record and writes it
"""

from rss_archive.core.bucketizer import Bucketizer, DayBuilder
from rss_archive.core.crawler import Crawler
from rss_archive.core.dates import DateNormalizer, NormalizedDate, utc_day
from rss_archive.core.fetcher import FeedFetcher, FetchResult, FetchStats, decode_feed
from rss_archive.core.loader import ChannelLoader, ensure_canonical, merge_channel_groups
from rss_archive.core.pipeline import ArchivePipeline, RunSummary
from rss_archive.core.store import DayStore, merge_days

__all__ = [
    "ArchivePipeline",
    "RunSummary",
    "ChannelLoader",
    "merge_channel_groups",
    "ensure_canonical",
    "Crawler",
    "FeedFetcher",
    "FetchResult",
    "FetchStats",
    "decode_feed",
    "Bucketizer",
    "DayBuilder",
    "DateNormalizer",
    "NormalizedDate",
    "utc_day",
    "DayStore",
    "merge_days",
]
