"""
External API clients for the weather, country and currency providers.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp
from pydantic import BaseModel, Field, ValidationError

from world_gateway.config import ExternalAPIConfig

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Base exception for failed calls to a third-party provider."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NetworkError(UpstreamError):
    """The provider could not be reached or did not answer in time."""


class UpstreamStatusError(UpstreamError):
    """The provider answered with a non-success status."""


class MalformedPayloadError(UpstreamError):
    """The provider answered with a body we cannot use."""


# OpenWeatherMap payloads


class WeatherCondition(BaseModel):
    """One entry of the OpenWeatherMap ``weather`` list."""

    main: str = ""
    description: str


class MainReadings(BaseModel):
    temp: float
    feels_like: float
    humidity: float


class Wind(BaseModel):
    speed: float


class SunTimes(BaseModel):
    sunrise: int
    sunset: int


class CurrentWeatherPayload(BaseModel):
    """Model for the OpenWeatherMap current weather response."""

    weather: List[WeatherCondition] = Field(..., min_length=1)
    main: MainReadings
    wind: Wind
    sys: SunTimes

    @property
    def condition(self) -> WeatherCondition:
        """Primary weather condition."""
        return self.weather[0]


class ForecastItem(BaseModel):
    """One time step of the OpenWeatherMap forecast."""

    dt: int = Field(..., description="Forecast time, unix seconds")
    main: MainReadings
    weather: List[WeatherCondition] = Field(..., min_length=1)
    wind: Wind

    @property
    def condition(self) -> WeatherCondition:
        return self.weather[0]


class ForecastPayload(BaseModel):
    """Model for the OpenWeatherMap 5 day / 3 hour forecast response."""

    items: List[ForecastItem] = Field(..., alias="list")


# REST Countries payloads


class CountryName(BaseModel):
    common: str


class CurrencyInfo(BaseModel):
    name: str


class Flags(BaseModel):
    svg: Optional[str] = None


class CountryPayload(BaseModel):
    """Model for one REST Countries entry; only name and population are required."""

    name: CountryName
    population: int
    capital: Optional[List[str]] = None
    area: Optional[float] = None
    languages: Optional[Dict[str, str]] = None
    currencies: Optional[Dict[str, CurrencyInfo]] = None
    region: Optional[str] = None
    subregion: Optional[str] = None
    flags: Optional[Flags] = None


def parse_country(raw: Any) -> CountryPayload:
    """
    Validate a single REST Countries entry.

    Raises:
        MalformedPayloadError: If required fields are missing or mistyped
    """
    try:
        return CountryPayload.model_validate(raw)
    except ValidationError as e:
        raise MalformedPayloadError(f"Unexpected country payload: {e}") from e


class UpstreamClient:
    """
    Base asynchronous client: one GET per call, bounded by a timeout.
    """

    provider = "upstream"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = aiohttp.ClientTimeout(
            total=timeout or ExternalAPIConfig.DEFAULT_TIMEOUT
        )

    async def _get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """
        Issue a GET request and decode the JSON body.

        Raises:
            NetworkError: On connection failure or timeout
            UpstreamStatusError: On a non-2xx response
            MalformedPayloadError: If the body is not JSON
        """
        logger.debug("Requesting %s from %s", url, self.provider)
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url, params=params) as response:
                    if not 200 <= response.status < 300:
                        body = await response.text()
                        logger.warning(
                            "%s returned status %d: %s",
                            self.provider,
                            response.status,
                            body[:200],
                        )
                        raise UpstreamStatusError(
                            f"{self.provider} returned status {response.status}",
                            status_code=response.status,
                        )
                    try:
                        return await response.json(content_type=None)
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        raise MalformedPayloadError(
                            f"{self.provider} returned a non-JSON body",
                            status_code=response.status,
                        ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"Could not reach {self.provider}: {e.__class__.__name__}"
            ) from e

    @staticmethod
    def _validate(model, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise MalformedPayloadError(
                f"Unexpected {model.__name__} payload: {e}"
            ) from e


class OpenWeatherMapClient(UpstreamClient):
    """Client for the OpenWeatherMap current weather and forecast endpoints."""

    provider = "OpenWeatherMap"

    def __init__(self, api_key: str, timeout: Optional[float] = None):
        """
        Initialize the OpenWeatherMap client.

        Args:
            api_key: OpenWeatherMap API key
            timeout: Request timeout in seconds (defaults to config value)
        """
        super().__init__(timeout)
        self.api_key = api_key
        self.base_url = ExternalAPIConfig.OPENWEATHER_BASE_URL

    def _params(self, city: str, country: str) -> Dict[str, str]:
        return {
            "q": f"{city},{country}",
            "units": ExternalAPIConfig.OPENWEATHER_UNITS,
            "appid": self.api_key,
        }

    async def get_current_weather(self, city: str, country: str) -> CurrentWeatherPayload:
        """
        Get current conditions for a city.

        Args:
            city: City name, forwarded verbatim
            country: Country name or code, forwarded verbatim

        Returns:
            CurrentWeatherPayload: Validated upstream payload

        Raises:
            UpstreamError: If the request fails or the payload is unusable
        """
        payload = await self._get_json(
            f"{self.base_url}/weather", params=self._params(city, country)
        )
        return self._validate(CurrentWeatherPayload, payload)

    async def get_forecast(self, city: str, country: str) -> ForecastPayload:
        """Get the 5 day / 3 hour forecast for a city."""
        payload = await self._get_json(
            f"{self.base_url}/forecast", params=self._params(city, country)
        )
        return self._validate(ForecastPayload, payload)


class RestCountriesClient(UpstreamClient):
    """Client for the REST Countries v3.1 API. No credentials required."""

    provider = "REST Countries"

    def __init__(self, timeout: Optional[float] = None):
        super().__init__(timeout)
        self.base_url = ExternalAPIConfig.RESTCOUNTRIES_BASE_URL

    async def get_country_by_name(self, country_name: str) -> CountryPayload:
        """
        Look up a country by name and return the best match.

        The provider may return several fuzzy matches; its own ranking is kept
        and only the first entry is used.
        """
        payload = await self._get_json(
            f"{self.base_url}/name/{quote(country_name, safe='')}"
        )
        if not isinstance(payload, list) or not payload:
            raise MalformedPayloadError(f"No country entries returned for {country_name}")
        return parse_country(payload[0])

    async def get_all_countries(self) -> List[Dict[str, Any]]:
        """
        Fetch the whole catalog in one call.

        Entries are returned undecoded so callers only validate what they use.
        """
        payload = await self._get_json(
            f"{self.base_url}/all",
            params={"fields": ExternalAPIConfig.RESTCOUNTRIES_ALL_FIELDS},
        )
        if not isinstance(payload, list):
            raise MalformedPayloadError("Country catalog is not a list")
        return payload


class CurrencyConverterClient(UpstreamClient):
    """Client for the Free Currency Converter API."""

    provider = "CurrencyConverter"

    def __init__(self, api_key: str, timeout: Optional[float] = None):
        super().__init__(timeout)
        self.api_key = api_key
        self.base_url = ExternalAPIConfig.CURRCONV_BASE_URL

    async def get_rate(self, from_currency: str, to_currency: str) -> float:
        """
        Fetch the current conversion rate for a currency pair.

        Returns:
            float: Units of ``to_currency`` per unit of ``from_currency``
        """
        pair = f"{from_currency}_{to_currency}"
        payload = await self._get_json(
            f"{self.base_url}/convert",
            params={"q": pair, "compact": "ultra", "apiKey": self.api_key},
        )
        if not isinstance(payload, dict) or pair not in payload:
            raise MalformedPayloadError(f"Rate for {pair} missing from response")

        rate = payload[pair]
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            raise MalformedPayloadError(f"Rate for {pair} is not a number: {rate!r}")
        return rate
