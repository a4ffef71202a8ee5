"""Unit tests for feed fetcher."""

from unittest.mock import MagicMock, Mock, patch

import httpx
import pytest

from rss_archive.core.fetcher import FeedFetcher, FetchResult, FetchStats, decode_feed, split_channels
from rss_archive.errors import FeedDecodeError
from rss_archive.models import FeedChannel

URL = "http://www.cnet.com/rss/iphone-update/"


def _status_error(url, status):
    request = httpx.Request("GET", url)
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


class TestFetchResult:
    """Tests for FetchResult dataclass."""

    def test_successful_result(self):
        """Test creating a successful result."""
        result = FetchResult(success=True, feed_url=URL, channels=[FeedChannel(title="t")])

        assert result.error is None
        assert result.items_count == 0

    def test_failed_result_default_error(self):
        """Test a failed result always carries an error."""
        result = FetchResult(success=False, feed_url=URL)

        assert result.error == "Unknown error"

    def test_result_validation(self):
        """Test a successful result cannot carry an error."""
        with pytest.raises(ValueError):
            FetchResult(success=True, feed_url=URL, error="boom")


class TestFetchStats:
    """Tests for FetchStats dataclass."""

    def test_counts(self, wsj_rss):
        """Test successes and failures are tallied."""
        stats = FetchStats()
        stats.add_result(
            FetchResult(success=True, feed_url=URL, channels=decode_feed(wsj_rss), fetch_time_seconds=1.0)
        )
        stats.add_result(FetchResult(success=False, feed_url=URL, error="Timeout: slow"))
        stats.add_result(FetchResult(success=False, feed_url=URL, error="Timeout: slower"))

        assert stats.total_urls == 3
        assert stats.successful_fetches == 1
        assert stats.failed_fetches == 2
        assert stats.total_channels == 1
        assert stats.total_items == 3
        assert stats.errors_by_type == {"Timeout": 2}
        assert stats.success_rate == pytest.approx(1 / 3)

    def test_empty_success_rate(self):
        """Test success rate with nothing fetched."""
        assert FetchStats().success_rate == 0.0


class TestDecodeFeed:
    """Tests for decode_feed."""

    def test_decode_channel_and_items(self, wsj_rss):
        """Test the consumed fields are extracted."""
        channels = decode_feed(wsj_rss)

        assert len(channels) == 1
        channel = channels[0]
        assert channel.title == "WSJ.com: World News"
        assert channel.desc == "World News"
        assert channel.owner is None
        assert [item.title for item in channel.items] == [
            "Brazil Lower House Votes to Impeach President",
            "Earthquake Strikes Ecuador",
            "Undated",
        ]
        first = channel.items[0]
        assert first.link == "http://www.wsj.com/articles/brazil-impeachment"
        assert first.desc == "The lower house voted to impeach Dilma Rousseff."
        assert first.date == "Sun, 17 Apr 2016 23:30:00 EDT"

    def test_decode_keeps_raw_date(self, cnet_rss):
        """Test publication dates are passed through unparsed."""
        channel = decode_feed(cnet_rss)[0]

        assert channel.items[0].date.strip() == "Tue, 19 Apr 2016 17:25:18 +0000"
        assert channel.title.strip() == "CNET iPhone Update"

    def test_decode_empty_channel(self):
        """Test a channel without items."""
        content = (
            b'<?xml version="1.0"?><rss version="2.0"><channel>'
            b"<title>Empty</title><description>Nothing yet</description>"
            b"</channel></rss>"
        )

        channels = decode_feed(content)

        assert channels[0].title == "Empty"
        assert channels[0].items == []

    def test_decode_missing_fields(self):
        """Test missing elements decode as empty strings."""
        content = (
            b'<?xml version="1.0"?><rss version="2.0"><channel><title>T</title>'
            b"<item><title>Only a title</title></item></channel></rss>"
        )

        item = decode_feed(content)[0].items[0]

        assert item.title == "Only a title"
        assert item.link == ""
        assert item.desc == ""
        assert item.date == ""

    def test_decode_several_channels(self):
        """Test each channel of a document keeps its own items."""
        content = (
            b'<?xml version="1.0"?><rss version="2.0">'
            b"<channel><title>C1</title><description>First</description>"
            b"<item><title>a</title><link>http://example.com/a</link></item></channel>"
            b"<channel><title>C2</title><description>Second</description>"
            b"<item><title>b</title><link>http://example.com/b</link></item></channel>"
            b"</rss>"
        )

        channels = decode_feed(content)

        assert [(c.title, c.desc) for c in channels] == [("C1", "First"), ("C2", "Second")]
        assert [[i.title for i in c.items] for c in channels] == [["a"], ["b"]]
        assert channels[1].items[0].link == "http://example.com/b"

    def test_decode_no_channel(self):
        """Test an rss document without channels yields no records."""
        assert decode_feed(b'<?xml version="1.0"?><rss version="2.0"></rss>') == []

    def test_single_channel_not_split(self, cnet_rss):
        """Test a one-channel document is decoded as published."""
        assert split_channels(cnet_rss) == [cnet_rss]

    def test_decode_keeps_markup(self):
        """Test description HTML is stored as published, not sanitized."""
        content = (
            b'<?xml version="1.0"?><rss version="2.0"><channel><title>T</title>'
            b"<item><title>Markup</title>"
            b'<description>&lt;p onclick="x()"&gt;hi&lt;/p&gt;&lt;script&gt;bad()&lt;/script&gt;</description>'
            b"</item></channel></rss>"
        )

        item = decode_feed(content)[0].items[0]

        assert item.desc == '<p onclick="x()">hi</p><script>bad()</script>'

    def test_decode_not_a_feed(self):
        """Test a document that is not a feed is rejected."""
        with pytest.raises(FeedDecodeError):
            decode_feed(b"this is plainly not a feed")


class TestFeedFetcher:
    """Tests for FeedFetcher."""

    def test_init_from_config(self, fresh_config):
        """Test defaults come from configuration."""
        fresh_config.fetcher.timeout_seconds = 7

        fetcher = FeedFetcher()

        assert fetcher.timeout_seconds == 7
        assert fetcher.user_agent == fresh_config.fetcher.user_agent

    def test_fetch_success(self, cnet_rss):
        """Test a successful fetch decodes the body."""
        fetcher = FeedFetcher()

        with patch.object(fetcher, "_fetch_http", return_value=Mock(status_code=200, content=cnet_rss)):
            result = fetcher.fetch(URL)

        assert result.success is True
        assert result.http_status == 200
        assert result.feed_url == URL
        assert result.items_count == 1

    def test_fetch_timeout(self):
        """Test a timeout becomes a failed result."""
        fetcher = FeedFetcher()

        with patch.object(fetcher, "_fetch_http", side_effect=httpx.ConnectTimeout("timed out")):
            result = fetcher.fetch(URL)

        assert result.success is False
        assert result.error.startswith("Timeout")
        assert result.channels == []

    def test_fetch_http_error(self):
        """Test an HTTP error status becomes a failed result."""
        fetcher = FeedFetcher()

        with patch.object(fetcher, "_fetch_http", side_effect=_status_error(URL, 404)):
            result = fetcher.fetch(URL)

        assert result.success is False
        assert result.http_status == 404
        assert result.error.startswith("HTTP 404")

    def test_fetch_network_error(self):
        """Test a connection failure becomes a failed result."""
        fetcher = FeedFetcher()

        with patch.object(fetcher, "_fetch_http", side_effect=httpx.ConnectError("refused")):
            result = fetcher.fetch(URL)

        assert result.success is False
        assert result.error.startswith("Request error")

    def test_fetch_decode_error(self):
        """Test an undecodable body becomes a failed result."""
        fetcher = FeedFetcher()

        with patch.object(fetcher, "_fetch_http", return_value=Mock(status_code=200, content=b"nope")):
            result = fetcher.fetch(URL)

        assert result.success is False
        assert result.http_status == 200
        assert result.error.startswith("Decode error")

    def test_fetch_is_not_retried(self):
        """Test a failing URL is requested exactly once."""
        fetcher = FeedFetcher()

        with patch.object(fetcher, "_fetch_http", side_effect=httpx.ConnectError("refused")) as mock_http:
            fetcher.fetch(URL)

        mock_http.assert_called_once_with(URL)

    def test_fetch_http_sends_user_agent(self):
        """Test the HTTP layer sends the configured User-Agent."""
        fetcher = FeedFetcher(user_agent="archive-test/1.0")
        client = MagicMock()
        client.get.return_value = Mock(status_code=200)
        client.__enter__.return_value = client

        with patch("rss_archive.core.fetcher.httpx.Client", return_value=client):
            fetcher._fetch_http(URL)

        client.get.assert_called_once_with(URL, headers={"User-Agent": "archive-test/1.0"})
