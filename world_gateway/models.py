"""
Pydantic models for gateway responses.
"""

from typing import List, Union
from pydantic import BaseModel, ConfigDict

NOT_AVAILABLE = "Not Available"


class ViewModel(BaseModel):
    """Immutable response view."""

    model_config = ConfigDict(frozen=True)


class WeatherSummary(ViewModel):
    """Response model for current weather."""

    location: str
    description: str
    temperature: str
    feels_like: str
    humidity: str
    wind_speed: str
    sunrise: str
    sunset: str


class ForecastEntry(ViewModel):
    """One forecast time step."""

    date: str
    time: str
    temperature: str
    feels_like: str
    main: str
    description: str
    wind_speed: str
    humidity: str


class ForecastResponse(ViewModel):
    """Response model for the forecast route."""

    location: str
    forecast: List[ForecastEntry]


class CountryProfile(ViewModel):
    """Response model for a single country."""

    countryName: str
    capitalCity: str = NOT_AVAILABLE
    population: str
    area: str = NOT_AVAILABLE
    officialLanguage: str = NOT_AVAILABLE
    currencies: str = NOT_AVAILABLE
    region: str = NOT_AVAILABLE
    subregion: str = NOT_AVAILABLE
    flag: str = NOT_AVAILABLE


class ContinentCountry(ViewModel):
    """Country entry inside a continent listing."""

    countryName: str
    capitalCity: str = NOT_AVAILABLE
    population: str
    area: str = NOT_AVAILABLE
    languages: str = NOT_AVAILABLE
    flag: str = NOT_AVAILABLE


class ContinentListing(ViewModel):
    """Response model for the continent route."""

    continent: str
    numberOfCountries: int
    countries: List[ContinentCountry]


class ConversionResult(ViewModel):
    """Response model for currency conversion."""

    fromCurrency: str
    toCurrency: str
    originalAmount: str
    convertedAmount: str
    conversionRate: Union[int, float]


class MapsApiKey(ViewModel):
    """Response model for the maps key route."""

    apiKey: str
