"""
RSS Archive - date-bucketed archive of RSS feeds grouped by owner.

Each run fetches the configured feeds, buckets their items by UTC publication
day and merges them into one JSON record per day.
"""

__version__ = "0.1.0"
