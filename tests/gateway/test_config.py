"""
Tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from world_gateway.config import ExternalAPIConfig, GatewaySettings


class TestGatewaySettings:
    """Test cases for GatewaySettings."""

    def test_from_env(self, monkeypatch):
        """Test that every setting is read from the environment."""
        monkeypatch.setenv("OPENWEATHER_API_KEY", "ow")
        monkeypatch.setenv("CURRENCY_CONVERTER_API_KEY", "cc")
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "gm")
        monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("MAPS_ALLOWED_ORIGINS", "https://a.test/, http://localhost:3000,,")
        monkeypatch.setenv("DISPLAY_TIMEZONE", "Europe/London")

        settings = GatewaySettings.from_env()

        assert settings.openweather_api_key == "ow"
        assert settings.currency_converter_api_key == "cc"
        assert settings.google_maps_api_key == "gm"
        assert settings.upstream_timeout == 2.5
        assert settings.maps_allowed_origins == ("https://a.test", "http://localhost:3000")
        assert settings.display_timezone == "Europe/London"
        assert settings.missing_credentials() == []

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is configured."""
        for name in [
            "OPENWEATHER_API_KEY",
            "CURRENCY_CONVERTER_API_KEY",
            "GOOGLE_MAPS_API_KEY",
            "UPSTREAM_TIMEOUT_SECONDS",
            "MAPS_ALLOWED_ORIGINS",
            "DISPLAY_TIMEZONE",
        ]:
            monkeypatch.delenv(name, raising=False)

        settings = GatewaySettings.from_env()

        assert settings.upstream_timeout == ExternalAPIConfig.DEFAULT_TIMEOUT
        assert settings.maps_allowed_origins == ()
        assert settings.display_timezone is None
        assert settings.missing_credentials() == [
            "OPENWEATHER_API_KEY",
            "CURRENCY_CONVERTER_API_KEY",
            "GOOGLE_MAPS_API_KEY",
        ]

    def test_frozen(self):
        """Test that settings cannot be changed after loading."""
        settings = GatewaySettings(openweather_api_key="ow")

        with pytest.raises(ValidationError):
            settings.openweather_api_key = "changed"


class TestDisplayTimezone:
    """Test cases for DISPLAY_TIMEZONE validation."""

    @pytest.mark.parametrize("zone", ["UTC", "Asia/Seoul", "America/New_York"])
    def test_known_zone_accepted(self, zone):
        """Test that tz database names are accepted."""
        assert GatewaySettings(display_timezone=zone).display_timezone == zone

    @pytest.mark.parametrize("zone", ["Mars/Olympus", "Not A Zone", "../etc/passwd"])
    def test_unknown_zone_rejected(self, zone):
        """Test that unknown zone names fail validation."""
        with pytest.raises(ValidationError, match="Unknown DISPLAY_TIMEZONE"):
            GatewaySettings(display_timezone=zone)

    def test_unknown_zone_rejected_from_env(self, monkeypatch):
        """Test that a bad DISPLAY_TIMEZONE fails at load, not per request."""
        monkeypatch.setenv("DISPLAY_TIMEZONE", "Mars/Olympus")

        with pytest.raises(ValidationError, match="Mars/Olympus"):
            GatewaySettings.from_env()

    def test_empty_zone_means_server_local(self, monkeypatch):
        """Test that an empty DISPLAY_TIMEZONE falls back to local time."""
        monkeypatch.setenv("DISPLAY_TIMEZONE", "")

        assert GatewaySettings.from_env().display_timezone is None
