"""
Weather service layer: fetches OpenWeatherMap data and reshapes it.
"""

import logging

from world_gateway.config import GatewaySettings
from world_gateway.external_api import (
    CurrentWeatherPayload,
    ForecastItem,
    OpenWeatherMapClient,
)
from world_gateway.formatting import (
    celsius,
    format_date,
    format_time,
    meters_per_second,
    percent,
    resolve_timezone,
)
from world_gateway.models import ForecastEntry, ForecastResponse, WeatherSummary

logger = logging.getLogger(__name__)


def location_label(city: str, country: str) -> str:
    return f"{city}, {country}"


class WeatherService:
    """
    Weather service that turns provider payloads into display summaries.
    """

    def __init__(self, settings: GatewaySettings):
        """
        Initialize the weather service.

        Args:
            settings: Gateway settings holding the OpenWeatherMap key
        """
        self.api_client = OpenWeatherMapClient(
            settings.openweather_api_key, timeout=settings.upstream_timeout
        )
        self.tz = resolve_timezone(settings.display_timezone)

    async def get_current_weather(self, city: str, country: str) -> WeatherSummary:
        """
        Get current weather for a city.

        Raises:
            UpstreamError: If weather data cannot be retrieved
        """
        payload = await self.api_client.get_current_weather(city, country)
        return self._convert_to_summary(city, country, payload)

    async def get_forecast(self, city: str, country: str) -> ForecastResponse:
        """
        Get the forecast for a city, one entry per upstream time step.

        Raises:
            UpstreamError: If forecast data cannot be retrieved
        """
        payload = await self.api_client.get_forecast(city, country)
        logger.debug("Forecast for %s, %s has %d entries", city, country, len(payload.items))
        return ForecastResponse(
            location=location_label(city, country),
            forecast=[self._convert_to_entry(item) for item in payload.items],
        )

    def _convert_to_summary(
        self, city: str, country: str, payload: CurrentWeatherPayload
    ) -> WeatherSummary:
        return WeatherSummary(
            location=location_label(city, country),
            description=payload.condition.description,
            temperature=celsius(payload.main.temp),
            feels_like=celsius(payload.main.feels_like),
            humidity=percent(payload.main.humidity),
            wind_speed=meters_per_second(payload.wind.speed),
            sunrise=format_time(payload.sys.sunrise, self.tz),
            sunset=format_time(payload.sys.sunset, self.tz),
        )

    def _convert_to_entry(self, item: ForecastItem) -> ForecastEntry:
        return ForecastEntry(
            date=format_date(item.dt, self.tz),
            time=format_time(item.dt, self.tz),
            temperature=celsius(item.main.temp),
            feels_like=celsius(item.main.feels_like),
            main=item.condition.main,
            description=item.condition.description,
            wind_speed=meters_per_second(item.wind.speed),
            humidity=percent(item.main.humidity),
        )
