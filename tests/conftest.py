"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from world_gateway.config import GatewaySettings
from world_gateway.lambda_function import app, get_settings

# 2023-11-14 22:13:20 UTC
REFERENCE_EPOCH = 1700000000


@pytest.fixture
def settings() -> GatewaySettings:
    """Settings with fake credentials and a fixed display timezone."""
    return GatewaySettings(
        openweather_api_key="test_openweather_api_key_123",
        currency_converter_api_key="test_currconv_api_key_456",
        google_maps_api_key="test-maps-key-789",
        upstream_timeout=5,
        display_timezone="UTC",
    )


@pytest.fixture
def client(settings):
    """Test client with the settings fixture injected."""
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_current_weather_response() -> dict:
    """Mock OpenWeatherMap current weather response (metric units)."""
    return {
        "name": "Seoul",
        "main": {"temp": 22.5, "feels_like": 21, "humidity": 65, "pressure": 1013},
        "weather": [
            {"main": "Clouds", "description": "scattered clouds", "icon": "03d"},
            {"main": "Mist", "description": "mist", "icon": "50d"},
        ],
        "wind": {"speed": 3.6, "deg": 250},
        "sys": {
            "country": "KR",
            "sunrise": REFERENCE_EPOCH - 16 * 3600,
            "sunset": REFERENCE_EPOCH - 5 * 3600,
        },
        "dt": REFERENCE_EPOCH,
    }


@pytest.fixture
def mock_forecast_response() -> dict:
    """Mock OpenWeatherMap forecast response with three 3-hour steps."""

    def step(offset_hours, temp, main, description):
        return {
            "dt": REFERENCE_EPOCH + offset_hours * 3600,
            "main": {"temp": temp, "feels_like": temp, "humidity": 70},
            "weather": [{"main": main, "description": description}],
            "wind": {"speed": 2},
        }

    return {
        "cod": "200",
        "cnt": 3,
        "list": [
            step(0, 18.2, "Clear", "clear sky"),
            step(3, 16, "Clouds", "few clouds"),
            step(6, 14.75, "Rain", "light rain"),
        ],
    }


@pytest.fixture
def mock_country_response() -> list:
    """Mock REST Countries name lookup with two fuzzy matches."""
    return [
        {
            "name": {"common": "Canada", "official": "Canada"},
            "capital": ["Ottawa"],
            "population": 38005238,
            "area": 9984670.0,
            "languages": {"eng": "English", "fra": "French"},
            "currencies": {"CAD": {"name": "Canadian dollar", "symbol": "$"}},
            "region": "Americas",
            "subregion": "North America",
            "flags": {"png": "https://flagcdn.com/w320/ca.png", "svg": "https://flagcdn.com/ca.svg"},
        },
        {
            "name": {"common": "Canary Islands"},
            "population": 2100000,
            "region": "Africa",
        },
    ]


@pytest.fixture
def mock_all_countries_response() -> list:
    """Mock REST Countries catalog."""
    return [
        {
            "name": {"common": "Kenya"},
            "capital": ["Nairobi"],
            "population": 53771300,
            "area": 580367.0,
            "languages": {"eng": "English", "swa": "Swahili"},
            "flags": {"svg": "https://flagcdn.com/ke.svg"},
            "region": "Africa",
        },
        {
            "name": {"common": "France"},
            "capital": ["Paris"],
            "population": 67391582,
            "area": 551695.0,
            "languages": {"fra": "French"},
            "flags": {"svg": "https://flagcdn.com/fr.svg"},
            "region": "Europe",
        },
        {
            "name": {"common": "Bouvet Island"},
            "population": 0,
            "area": 49.0,
            "flags": {"svg": "https://flagcdn.com/bv.svg"},
            "region": "Antarctic",
        },
        {
            "name": {"common": "Western Sahara"},
            "capital": [],
            "population": 510713,
            "flags": {},
            "region": "Africa",
        },
        # Malformed, but never selected by an Africa query
        {"name": {"common": "Nowhere"}, "region": "Oceania"},
        # No region at all: never part of any continent
        {"name": {"common": "Regionless Atoll"}, "population": 12},
        {"name": {"common": "Null Region Isle"}, "population": 34, "region": None},
    ]
