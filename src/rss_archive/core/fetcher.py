"""
RSS feed fetcher and decoder.

Each URL is fetched once; failures are reported in the result, never raised,
and never retried.
"""

import time
from dataclasses import dataclass, field
from typing import Optional
from xml.etree import ElementTree

import feedparser
import httpx

from rss_archive.config import get_config
from rss_archive.errors import FeedDecodeError
from rss_archive.logger import get_logger
from rss_archive.models import FeedChannel, FeedItem

logger = get_logger(__name__)


@dataclass
class FetchResult:
    """Result of fetching and decoding one feed URL."""

    success: bool
    feed_url: str
    channels: list[FeedChannel] = field(default_factory=list)
    error: Optional[str] = None
    fetch_time_seconds: float = 0.0
    http_status: Optional[int] = None

    def __post_init__(self):
        """Validate fetch result."""
        if self.success and self.error:
            raise ValueError("Successful fetch cannot have an error")
        if not self.success and not self.error:
            self.error = "Unknown error"

    @property
    def items_count(self) -> int:
        return sum(len(channel.items) for channel in self.channels)


@dataclass
class FetchStats:
    """Statistics for one crawl."""

    total_urls: int = 0
    successful_fetches: int = 0
    failed_fetches: int = 0
    total_channels: int = 0
    total_items: int = 0
    total_time_seconds: float = 0.0
    errors_by_type: dict = field(default_factory=dict)

    def add_result(self, result: FetchResult) -> None:
        """Add a fetch result to statistics.

        Args:
            result: FetchResult to add
        """
        self.total_urls += 1
        self.total_time_seconds += result.fetch_time_seconds

        if result.success:
            self.successful_fetches += 1
            self.total_channels += len(result.channels)
            self.total_items += result.items_count
        else:
            self.failed_fetches += 1
            error_type = result.error.split(":")[0] if result.error else "unknown"
            self.errors_by_type[error_type] = self.errors_by_type.get(error_type, 0) + 1

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        if self.total_urls == 0:
            return 0.0
        return self.successful_fetches / self.total_urls


def split_channels(content: bytes) -> list[bytes]:
    """Split an RSS document into one document per ``<channel>`` element.

    feedparser folds every channel of a document into a single feed, so a
    document with several channels is cut apart before decoding. Anything
    that is not well-formed ``<rss>`` XML is passed through whole.

    Args:
        content: Raw document body

    Returns:
        Documents to decode, one per channel
    """
    try:
        root = ElementTree.fromstring(content)
    except ElementTree.ParseError:
        return [content]

    if root.tag != "rss":
        return [content]

    channels = root.findall("channel")
    if len(channels) == 1:
        return [content]

    documents = []
    for channel in channels:
        rss = ElementTree.Element("rss", root.attrib)
        rss.append(channel)
        documents.append(ElementTree.tostring(rss, encoding="utf-8"))
    return documents


def decode_channel(content: bytes) -> FeedChannel:
    """Decode a single-channel feed document.

    HTML in titles and descriptions is kept as published: no sanitizing and
    no relative URI resolution.

    Raises:
        FeedDecodeError: The document is not a recognizable feed
    """
    parsed = feedparser.parse(content, sanitize_html=False, resolve_relative_uris=False)

    if not parsed.get("version"):
        reason = parsed.get("bozo_exception") or "unrecognized document"
        raise FeedDecodeError(f"Not an RSS feed: {reason}")

    items = [
        FeedItem(
            title=entry.get("title") or "",
            link=entry.get("link") or "",
            desc=entry.get("description") or "",
            date=entry.get("published") or "",
        )
        for entry in parsed.entries
    ]

    return FeedChannel(
        title=parsed.feed.get("title") or "",
        desc=parsed.feed.get("description") or "",
        items=items,
    )


def decode_feed(content: bytes) -> list[FeedChannel]:
    """Decode an RSS document into channel records.

    Only the channel title and description and each item's title, link,
    description and publication date are kept. An ``<rss>`` document yields
    one record per ``<channel>``, possibly none.

    Args:
        content: Raw document body

    Returns:
        Channels found in the document

    Raises:
        FeedDecodeError: The document is not a recognizable feed
    """
    return [decode_channel(document) for document in split_channels(content)]


class FeedFetcher:
    """Fetches feed documents over HTTP, one URL at a time."""

    def __init__(
        self,
        timeout_seconds: Optional[int] = None,
        user_agent: Optional[str] = None,
    ):
        """Initialize feed fetcher.

        Args:
            timeout_seconds: Request timeout in seconds
            user_agent: User-Agent header for HTTP requests
        """
        config = get_config()

        self.timeout_seconds = timeout_seconds or config.fetcher.timeout_seconds
        self.user_agent = user_agent or config.fetcher.user_agent
        self.follow_redirects = config.fetcher.follow_redirects
        self.max_redirects = config.fetcher.max_redirects

    def fetch(self, url: str) -> FetchResult:
        """Fetch and decode a single feed.

        Args:
            url: Feed URL

        Returns:
            FetchResult with channels or error
        """
        start_time = time.time()
        http_status = None

        logger.debug(f"Fetching feed: {url}")

        try:
            response = self._fetch_http(url)
            http_status = response.status_code
            channels = decode_feed(response.content)

        except httpx.TimeoutException as e:
            error = f"Timeout: {e}"
            logger.warning(f"Timeout fetching {url}")

        except httpx.HTTPStatusError as e:
            http_status = e.response.status_code
            error = f"HTTP {http_status}: {e}"
            logger.warning(f"HTTP error fetching {url}: {error}")

        except (httpx.RequestError, httpx.InvalidURL) as e:
            error = f"Request error: {e}"
            logger.warning(f"Network error fetching {url}: {e}")

        except FeedDecodeError as e:
            error = f"Decode error: {e}"
            logger.error(f"Unable to decode {url}: {e}")

        else:
            fetch_time = time.time() - start_time
            result = FetchResult(
                success=True,
                feed_url=url,
                channels=channels,
                fetch_time_seconds=fetch_time,
                http_status=http_status,
            )
            logger.info(f"Fetched {result.items_count} items from {url} in {fetch_time:.2f}s")
            return result

        return FetchResult(
            success=False,
            feed_url=url,
            error=error,
            fetch_time_seconds=time.time() - start_time,
            http_status=http_status,
        )

    def _fetch_http(self, url: str) -> httpx.Response:
        """Fetch URL with HTTP client.

        Raises:
            httpx.TimeoutException: On timeout
            httpx.HTTPStatusError: On HTTP error
            httpx.RequestError: On network error
        """
        headers = {"User-Agent": self.user_agent}

        with httpx.Client(
            timeout=self.timeout_seconds,
            follow_redirects=self.follow_redirects,
            max_redirects=self.max_redirects,
        ) as client:
            response = client.get(url, headers=headers)
            response.raise_for_status()
            return response
