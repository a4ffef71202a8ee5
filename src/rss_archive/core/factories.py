"""
Factory functions for creating core components with configuration applied.

Usage:
    from rss_archive.core.factories import create_crawler, create_store

    crawler = create_crawler()
    store = create_store("data/items")
"""

from pathlib import Path
from typing import Mapping, Optional, Union

from rss_archive.config import get_config
from rss_archive.core.bucketizer import Bucketizer
from rss_archive.core.crawler import Crawler
from rss_archive.core.dates import DateNormalizer
from rss_archive.core.fetcher import FeedFetcher
from rss_archive.core.loader import ChannelLoader
from rss_archive.core.store import DayStore


def create_loader(fragment_suffix: Optional[str] = None) -> ChannelLoader:
    """Create a ChannelLoader reading fragments with the configured suffix."""
    config = get_config()
    return ChannelLoader(fragment_suffix=fragment_suffix or config.archive.fragment_suffix)


def create_fetcher(
    timeout_seconds: Optional[int] = None,
    user_agent: Optional[str] = None,
) -> FeedFetcher:
    """Create a configured FeedFetcher instance.

    Args:
        timeout_seconds: Override default timeout
        user_agent: Override default User-Agent

    Returns:
        Configured FeedFetcher instance
    """
    config = get_config()
    return FeedFetcher(
        timeout_seconds=timeout_seconds or config.fetcher.timeout_seconds,
        user_agent=user_agent or config.fetcher.user_agent,
    )


def create_crawler(fetcher: Optional[FeedFetcher] = None) -> Crawler:
    """Create a Crawler using ``fetcher`` or a configured one."""
    return Crawler(fetcher=fetcher or create_fetcher())


def create_normalizer(
    timezone_abbreviations: Optional[Mapping[str, str]] = None,
) -> DateNormalizer:
    """Create a DateNormalizer.

    Args:
        timezone_abbreviations: Override the configured abbreviation table
    """
    config = get_config()
    if timezone_abbreviations is None:
        timezone_abbreviations = config.dates.timezone_abbreviations
    return DateNormalizer(timezone_abbreviations=timezone_abbreviations)


def create_bucketizer(normalizer: Optional[DateNormalizer] = None) -> Bucketizer:
    """Create a Bucketizer using ``normalizer`` or a configured one."""
    return Bucketizer(normalizer=normalizer or create_normalizer())


def create_store(directory: Union[str, Path]) -> DayStore:
    """Create a DayStore over ``directory``."""
    return DayStore(directory)
