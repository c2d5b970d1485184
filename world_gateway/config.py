"""
Configuration constants and settings for the gateway.
"""

import os
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, field_validator


class ExternalAPIConfig:
    """External API configuration"""

    OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
    OPENWEATHER_UNITS = "metric"

    RESTCOUNTRIES_BASE_URL = "https://restcountries.com/v3.1"
    # The bulk endpoint rejects requests without a field selection
    RESTCOUNTRIES_ALL_FIELDS = "name,capital,population,area,languages,flags,region"

    CURRCONV_BASE_URL = "https://free.currconv.com/api/v7"

    DEFAULT_TIMEOUT = 10.0


class LambdaConfig:
    """Process-level configuration"""

    ENV = os.getenv("ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def _split_origins(value: str) -> Tuple[str, ...]:
    return tuple(
        origin.strip().rstrip("/") for origin in value.split(",") if origin.strip()
    )


class GatewaySettings(BaseModel):
    """Credentials and tunables, loaded once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    openweather_api_key: str = ""
    currency_converter_api_key: str = ""
    google_maps_api_key: str = ""
    upstream_timeout: float = ExternalAPIConfig.DEFAULT_TIMEOUT
    maps_allowed_origins: Tuple[str, ...] = ()
    display_timezone: Optional[str] = None

    @field_validator("display_timezone")
    @classmethod
    def _known_timezone(cls, value: Optional[str]) -> Optional[str]:
        """Reject zone names the tz database does not know, at startup."""
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown DISPLAY_TIMEZONE {value!r}") from e
        return value

    @classmethod
    def from_env(cls) -> "GatewaySettings":
        """Build settings from the process environment."""
        return cls(
            openweather_api_key=os.getenv("OPENWEATHER_API_KEY", ""),
            currency_converter_api_key=os.getenv("CURRENCY_CONVERTER_API_KEY", ""),
            google_maps_api_key=os.getenv("GOOGLE_MAPS_API_KEY", ""),
            upstream_timeout=float(
                os.getenv("UPSTREAM_TIMEOUT_SECONDS", str(ExternalAPIConfig.DEFAULT_TIMEOUT))
            ),
            maps_allowed_origins=_split_origins(os.getenv("MAPS_ALLOWED_ORIGINS", "")),
            display_timezone=os.getenv("DISPLAY_TIMEZONE") or None,
        )

    def missing_credentials(self) -> list[str]:
        """Names of credentials that are not configured."""
        credentials = {
            "OPENWEATHER_API_KEY": self.openweather_api_key,
            "CURRENCY_CONVERTER_API_KEY": self.currency_converter_api_key,
            "GOOGLE_MAPS_API_KEY": self.google_maps_api_key,
        }
        return [name for name, value in credentials.items() if not value]
