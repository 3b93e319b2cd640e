"""Shared pytest configuration and fixtures."""

import pytest

from check_http_xml.config.models import CheckConfig
from check_http_xml.utils.logger import setup_logger


STATS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<local_stats xmlns:ns2="urn:example:ping">
  <shares>
    <dead>2</dead>
    <live>12</live>
  </shares>
  <clients>
    <connected>234</connected>
  </clients>
  <total>14</total>
  <status_message>All shares reachable</status_message>
  <ping>
    <ns2:elapsedMs>37.5</ns2:elapsedMs>
  </ping>
</local_stats>
"""


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test", "DEBUG")


@pytest.fixture
def stats_document():
    """Parsed document used throughout the end-to-end scenarios."""
    return {
        "shares": {"dead": 2, "live": 12},
        "clients": {"connected": 234},
    }


@pytest.fixture
def stats_xml():
    """Raw XML status document."""
    return STATS_XML


@pytest.fixture
def make_config():
    """Factory for CheckConfig with a default URL."""
    def _make(**options):
        options.setdefault("url", "http://192.168.5.10:9332/local_stats")
        return CheckConfig(**options)
    return _make
