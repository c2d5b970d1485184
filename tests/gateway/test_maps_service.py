"""
Tests for the maps key origin policy.
"""

import pytest

from world_gateway.maps_service import is_origin_allowed, request_origin

ALLOWED = ("https://maps.example.com", "http://localhost:3000")


class TestRequestOrigin:
    """Test cases for deriving the calling origin."""

    def test_origin_header_wins(self):
        """Test that Origin takes precedence over Referer."""
        assert request_origin("https://a.test/", "https://b.test/page") == "https://a.test"

    def test_referer_fallback(self):
        """Test origin derived from the Referer URL."""
        assert request_origin(None, "http://localhost:3000/map?x=1") == "http://localhost:3000"

    @pytest.mark.parametrize("origin, referer", [(None, None), ("null", None), (None, "not a url")])
    def test_unknown(self, origin, referer):
        """Test that unusable headers give no origin."""
        assert request_origin(origin, referer) is None


class TestIsOriginAllowed:
    """Test cases for the maps key allow-list."""

    def test_no_allow_list_is_unrestricted(self):
        """Test that an empty allow-list serves everyone."""
        assert is_origin_allowed((), None, None)

    def test_listed_origin(self):
        """Test that a listed origin is allowed."""
        assert is_origin_allowed(ALLOWED, "http://localhost:3000", None)

    def test_unlisted_origin(self):
        """Test that a lookalike origin is refused."""
        assert not is_origin_allowed(ALLOWED, "https://maps.example.com.evil.test", None)

    def test_missing_headers(self):
        """Test that a caller without headers is refused."""
        assert not is_origin_allowed(ALLOWED, None, None)
