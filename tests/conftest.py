"""Shared fixtures."""

import json

import pytest

from rss_archive.config import Config, set_config

CNET_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>
      CNET iPhone Update
    </title>
    <link>http://www.cnet.com/</link>
    <description>
      Tips, news, how tos, and troubleshooting help for the iPhone.
    </description>
    <item>
      <title>
        Apple iPhone SE owners bemoan audio bug - CNET
      </title>
      <link>
        http://www.cnet.com/news/apple-iphone-se-owners-complain-of-phone-call-audio-bug/
      </link>
      <description>
        Introduced with the latest update to iOS, the glitch distorts the quality of phone calls.
      </description>
      <pubDate>Tue, 19 Apr 2016 17:25:18 +0000</pubDate>
    </item>
  </channel>
</rss>
"""

WSJ_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>WSJ.com: World News</title>
    <link>http://online.wsj.com/page/2_0006.html</link>
    <description>World News</description>
    <item>
      <title>Brazil Lower House Votes to Impeach President</title>
      <link>http://www.wsj.com/articles/brazil-impeachment</link>
      <description>The lower house voted to impeach Dilma Rousseff.</description>
      <pubDate>Sun, 17 Apr 2016 23:30:00 EDT</pubDate>
    </item>
    <item>
      <title>Earthquake Strikes Ecuador</title>
      <link>http://www.wsj.com/articles/ecuador-earthquake</link>
      <description>A magnitude 7.8 earthquake struck Ecuador.</description>
      <pubDate>Sun, 17 Apr 2016 12:00:00 -0500</pubDate>
    </item>
    <item>
      <title>Undated</title>
      <link>http://www.wsj.com/articles/undated</link>
      <description>No usable date.</description>
      <pubDate>yesterday</pubDate>
    </item>
  </channel>
</rss>
"""


@pytest.fixture(autouse=True)
def fresh_config():
    """Give every test a configuration built from defaults."""
    config = set_config(Config())
    config.logging.file_enabled = False
    yield config
    set_config(Config())


@pytest.fixture
def write_fragment():
    """Write a channel configuration fragment as JSON."""

    def _write(path, groups):
        path.write_text(json.dumps(groups), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cnet_rss():
    return CNET_RSS


@pytest.fixture
def wsj_rss():
    return WSJ_RSS
