"""
Currency conversion service.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import NamedTuple, Optional

from world_gateway.config import GatewaySettings
from world_gateway.external_api import CurrencyConverterClient, MalformedPayloadError
from world_gateway.models import ConversionResult

logger = logging.getLogger(__name__)

MISSING_AMOUNT_MESSAGE = "Please provide an amount to convert."
INVALID_AMOUNT_MESSAGE = "Please provide a numeric amount to convert."

CENTS = Decimal("0.01")
# Amounts must stay below 10 ** (MAX_AMOUNT_EXPONENT + 1)
MAX_AMOUNT_EXPONENT = 15
CONVERSION_PRECISION = 60


class CurrencyPair(NamedTuple):
    source: str
    target: str

    @property
    def label(self) -> str:
        return f"{self.source} to {self.target}"


USD_TO_EUR = CurrencyPair("USD", "EUR")
JPY_TO_GBP = CurrencyPair("JPY", "GBP")


class InvalidAmountError(ValueError):
    """The amount query value is absent, not a finite number, or too large."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def parse_amount(raw: Optional[str]) -> Decimal:
    """
    Parse the amount query value.

    Raises:
        InvalidAmountError: If the value is missing, empty, not a finite
            number, or 10 ** 16 or more in magnitude
    """
    if raw is None or not raw.strip():
        raise InvalidAmountError(MISSING_AMOUNT_MESSAGE)
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation as e:
        raise InvalidAmountError(INVALID_AMOUNT_MESSAGE) from e
    if not amount.is_finite():
        raise InvalidAmountError(INVALID_AMOUNT_MESSAGE)
    if amount and amount.adjusted() > MAX_AMOUNT_EXPONENT:
        raise InvalidAmountError(INVALID_AMOUNT_MESSAGE)
    return amount


def convert_amount(amount: Decimal, rate: float) -> Decimal:
    """``amount * rate`` rounded half-up to two decimal places."""
    with localcontext() as ctx:
        ctx.prec = CONVERSION_PRECISION
        return (amount * Decimal(str(rate))).quantize(CENTS, rounding=ROUND_HALF_UP)


class CurrencyService:
    """
    Converts amounts using a rate fetched fresh for every request.
    """

    def __init__(self, settings: GatewaySettings):
        self.api_client = CurrencyConverterClient(
            settings.currency_converter_api_key, timeout=settings.upstream_timeout
        )

    async def convert(self, pair: CurrencyPair, raw_amount: str) -> ConversionResult:
        """
        Convert ``raw_amount`` of ``pair.source`` into ``pair.target``.

        The amount is validated before any upstream call.

        Raises:
            InvalidAmountError: If the amount is missing, not numeric or too large
            UpstreamError: If the rate cannot be retrieved or used
        """
        amount = parse_amount(raw_amount)
        rate = await self.api_client.get_rate(pair.source, pair.target)
        try:
            converted = convert_amount(amount, rate)
        except ArithmeticError as e:
            raise MalformedPayloadError(
                f"Rate {rate!r} for {pair.label} cannot be applied"
            ) from e
        logger.debug("Converted %s %s at rate %s", raw_amount, pair.label, rate)

        return ConversionResult(
            fromCurrency=pair.source,
            toCurrency=pair.target,
            originalAmount=f"{raw_amount} {pair.source}",
            convertedAmount=f"{converted} {pair.target}",
            conversionRate=rate,
        )
