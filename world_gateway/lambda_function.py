"""
AWS Lambda handler with FastAPI application for the world info gateway.
"""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from mangum import Mangum

from world_gateway.config import GatewaySettings, LambdaConfig
from world_gateway.country_service import CountryService
from world_gateway.currency_service import (
    JPY_TO_GBP,
    USD_TO_EUR,
    CurrencyPair,
    CurrencyService,
    InvalidAmountError,
)
from world_gateway.external_api import UpstreamError
from world_gateway.maps_service import is_origin_allowed
from world_gateway.models import (
    ContinentListing,
    ConversionResult,
    CountryProfile,
    ForecastResponse,
    MapsApiKey,
    WeatherSummary,
)
from world_gateway.weather_service import WeatherService

SERVICE_NAME = "World Info Gateway"
SERVICE_VERSION = "1.0.0"
PUBLIC_DIR = Path(__file__).parent / "public"

# Configure logging
logging.basicConfig(
    level=LambdaConfig.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Failure surfaced to the client as a plain-text response."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def get_settings(request: Request) -> GatewaySettings:
    """Settings loaded at startup."""
    return request.app.state.settings


def _log_upstream_failure(message: str, error: UpstreamError) -> None:
    logger.error(
        "%s: %s (%s, status=%s)",
        message,
        error.message,
        error.__class__.__name__,
        error.status_code,
    )


# Initialize FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Weather, country, currency and map lookups backed by public APIs",
    version=SERVICE_VERSION,
)
app.state.settings = GatewaySettings.from_env()

for name in app.state.settings.missing_credentials():
    logger.warning("%s is not set; requests needing it will fail upstream", name)
if not app.state.settings.maps_allowed_origins:
    logger.warning("MAPS_ALLOWED_ORIGINS is not set; the maps key is served to any caller")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log one line per request with status and duration."""
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %d %.1f ms",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
        )


@app.exception_handler(GatewayError)
async def gateway_error_handler(request, exc: GatewayError):  # pylint: disable=unused-argument
    """Render handled failures as plain text."""
    return PlainTextResponse(exc.message, status_code=exc.status_code)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):  # pylint: disable=unused-argument
    """Global exception handler for unhandled errors."""
    logger.exception("Unhandled exception: %s", str(exc))
    return PlainTextResponse("Internal Server Error", status_code=500)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint providing API information."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "active",
        "endpoints": {
            "current_weather": "/currentWeather/{city}/{country}",
            "forecast": "/forecast/{city}/{country}",
            "country": "/country/{countryName}",
            "continent": "/continent/{continentName}",
            "usd_to_eur": "/convert/usd-to-eur?amount=AMOUNT",
            "jpy_to_gbp": "/convert/jpy-to-gbp?amount=AMOUNT",
            "map": "/map",
            "shortest_route": "/map/shortest-route",
            "health_check": "/health",
            "documentation": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check(settings: GatewaySettings = Depends(get_settings)):
    """Report which provider credentials are configured. No upstream calls."""
    missing = set(settings.missing_credentials())
    checks = {
        "openweathermap_api_key": "OPENWEATHER_API_KEY" not in missing,
        "currency_converter_api_key": "CURRENCY_CONVERTER_API_KEY" not in missing,
        "google_maps_api_key": "GOOGLE_MAPS_API_KEY" not in missing,
    }
    return {
        "status": "healthy",
        "environment": LambdaConfig.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            key: "configured" if ok else "missing" for key, ok in checks.items()
        },
    }


@app.get("/currentWeather/{city}/{country}", response_model=WeatherSummary)
async def get_current_weather(
    city: str, country: str, settings: GatewaySettings = Depends(get_settings)
):
    """
    Current conditions for a city.

    Args:
        city: City name, not checked against any gazetteer
        country: Country name or code

    Raises:
        GatewayError: 500 if the weather provider call fails
    """
    try:
        service = WeatherService(settings)
        return await service.get_current_weather(city, country)
    except UpstreamError as e:
        message = "Error retrieving current weather"
        _log_upstream_failure(f"{message} for {city}, {country}", e)
        raise GatewayError(500, message) from e


@app.get("/forecast/{city}/{country}", response_model=ForecastResponse)
async def get_forecast(
    city: str, country: str, settings: GatewaySettings = Depends(get_settings)
):
    """5 day forecast in 3 hour steps, in upstream order."""
    try:
        service = WeatherService(settings)
        return await service.get_forecast(city, country)
    except UpstreamError as e:
        message = "Error retrieving 5-day forecast"
        _log_upstream_failure(f"{message} for {city}, {country}", e)
        raise GatewayError(500, message) from e


@app.get("/country/{countryName}", response_model=CountryProfile)
async def get_country_info(
    countryName: str, settings: GatewaySettings = Depends(get_settings)
):
    """Profile of a single country, best upstream match first."""
    try:
        service = CountryService(settings)
        return await service.get_country_info(countryName)
    except UpstreamError as e:
        message = f"Error retrieving information about {countryName}"
        _log_upstream_failure(message, e)
        raise GatewayError(500, message) from e


@app.get("/continent/{continentName}", response_model=ContinentListing)
async def get_countries_by_continent(
    continentName: str, settings: GatewaySettings = Depends(get_settings)
):
    """Countries whose region matches the continent, ignoring case."""
    try:
        service = CountryService(settings)
        return await service.get_countries_by_continent(continentName)
    except UpstreamError as e:
        message = f"Error retrieving list of countries in {continentName}"
        _log_upstream_failure(message, e)
        raise GatewayError(500, message) from e


async def _convert(
    pair: CurrencyPair, amount: Optional[str], settings: GatewaySettings
) -> ConversionResult:
    try:
        service = CurrencyService(settings)
        return await service.convert(pair, amount)
    except InvalidAmountError as e:
        logger.info("Rejected %s conversion: %s", pair.label, e.message)
        raise GatewayError(400, e.message) from e
    except UpstreamError as e:
        message = f"Error converting {pair.label}"
        _log_upstream_failure(message, e)
        raise GatewayError(500, message) from e


@app.get("/convert/usd-to-eur", response_model=ConversionResult)
async def convert_usd_to_eur(
    amount: Optional[str] = Query(None),
    settings: GatewaySettings = Depends(get_settings),
):
    """Convert an amount of US dollars to euros."""
    return await _convert(USD_TO_EUR, amount, settings)


@app.get("/convert/jpy-to-gbp", response_model=ConversionResult)
async def convert_jpy_to_gbp(
    amount: Optional[str] = Query(None),
    settings: GatewaySettings = Depends(get_settings),
):
    """Convert an amount of Japanese yen to pounds sterling."""
    return await _convert(JPY_TO_GBP, amount, settings)


@app.get("/map", include_in_schema=False)
async def map_page():
    return FileResponse(PUBLIC_DIR / "map.html", media_type="text/html")


@app.get("/map/shortest-route", include_in_schema=False)
async def shortest_route_page():
    return FileResponse(PUBLIC_DIR / "shortest_route.html", media_type="text/html")


@app.get("/api/maps-api-key", response_model=MapsApiKey)
async def get_maps_api_key(
    settings: GatewaySettings = Depends(get_settings),
    origin: Optional[str] = Header(None),
    referer: Optional[str] = Header(None),
):
    """
    Map provider key for the map pages.

    When MAPS_ALLOWED_ORIGINS is set, only pages served from those origins
    receive the key.
    """
    if not is_origin_allowed(settings.maps_allowed_origins, origin, referer):
        raise GatewayError(403, "Access to the maps API key is not allowed from this origin")
    return MapsApiKey(apiKey=settings.google_maps_api_key)


# AWS Lambda handler using Mangum
lambda_handler = Mangum(app, lifespan="off")
