"""Data models for RSS Archive."""

from rss_archive.models.channel import ChannelGroup, ChannelGroups, FeedChannel, FeedItem
from rss_archive.models.day import ArchivedItem, Day, DayChannel, Owner

__all__ = [
    "ChannelGroup",
    "ChannelGroups",
    "FeedChannel",
    "FeedItem",
    "ArchivedItem",
    "Day",
    "DayChannel",
    "Owner",
]
