"""
Country service layer: REST Countries lookups reshaped into profiles.
"""

import logging
from typing import Any, Dict, List

from world_gateway.config import GatewaySettings
from world_gateway.external_api import CountryPayload, RestCountriesClient, parse_country
from world_gateway.formatting import (
    capitalize_label,
    first_or_default,
    format_grouped_number,
    join_or_default,
    square_kilometers,
    text_or_default,
)
from world_gateway.models import (
    NOT_AVAILABLE,
    ContinentCountry,
    ContinentListing,
    CountryProfile,
)

logger = logging.getLogger(__name__)


def _languages(country: CountryPayload) -> str:
    return join_or_default(list(country.languages.values()) if country.languages else None)


def _flag(country: CountryPayload) -> str:
    return text_or_default(country.flags.svg if country.flags else None)


def _region_matches(raw: Dict[str, Any], continent_name: str) -> bool:
    region = raw.get("region") if isinstance(raw, dict) else None
    return isinstance(region, str) and region.lower() == continent_name.lower()


class CountryService:
    """
    Builds country profiles and continent listings.
    """

    def __init__(self, settings: GatewaySettings):
        self.api_client = RestCountriesClient(timeout=settings.upstream_timeout)

    async def get_country_info(self, country_name: str) -> CountryProfile:
        """
        Profile of the provider's best match for ``country_name``.

        Raises:
            UpstreamError: If the lookup fails or returns nothing usable
        """
        country = await self.api_client.get_country_by_name(country_name)
        return self.to_profile(country)

    async def get_countries_by_continent(self, continent_name: str) -> ContinentListing:
        """
        All countries whose region equals ``continent_name``, ignoring case.

        Only matching entries are validated, so an incomplete entry elsewhere
        in the catalog does not fail the listing.

        Raises:
            UpstreamError: If the catalog cannot be fetched or a match is malformed
        """
        catalog = await self.api_client.get_all_countries()
        countries = [
            self.to_continent_entry(parse_country(raw))
            for raw in catalog
            if _region_matches(raw, continent_name)
        ]
        logger.debug(
            "%d of %d countries matched %s", len(countries), len(catalog), continent_name
        )
        return ContinentListing(
            continent=capitalize_label(continent_name),
            numberOfCountries=len(countries),
            countries=countries,
        )

    @staticmethod
    def to_profile(country: CountryPayload) -> CountryProfile:
        currencies: List[str] = (
            [currency.name for currency in country.currencies.values()]
            if country.currencies
            else []
        )
        return CountryProfile(
            countryName=country.name.common,
            capitalCity=first_or_default(country.capital),
            population=format_grouped_number(country.population),
            area=square_kilometers(country.area),
            officialLanguage=_languages(country),
            currencies=join_or_default(currencies),
            region=text_or_default(country.region),
            subregion=text_or_default(country.subregion),
            flag=_flag(country),
        )

    @staticmethod
    def to_continent_entry(country: CountryPayload) -> ContinentCountry:
        return ContinentCountry(
            countryName=country.name.common,
            capitalCity=first_or_default(country.capital),
            population=format_grouped_number(country.population),
            area=square_kilometers(country.area) if country.area else NOT_AVAILABLE,
            languages=_languages(country),
            flag=_flag(country),
        )
