"""
Display formatting shared by the response builders.

Numbers, dates and times are rendered the way an en-US browser locale shows
them, e.g. ``1,234,567``, ``10/18/2026`` and ``6:05:09 AM``.
"""

from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from world_gateway.models import NOT_AVAILABLE


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Return the named zone, or None for the server's local time."""
    return ZoneInfo(name) if name else None


def format_plain_number(value: float) -> str:
    """Render a measurement in positional notation, no trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    # repr keeps the shortest round-tripping digits, "f" avoids exponents
    return format(Decimal(repr(float(value))), "f")


def format_grouped_number(value: float) -> str:
    """Thousands separators, at most three fraction digits."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def celsius(value: float) -> str:
    return f"{format_plain_number(value)}°C"


def percent(value: float) -> str:
    return f"{format_plain_number(value)}%"


def meters_per_second(value: float) -> str:
    return f"{format_plain_number(value)} m/s"


def square_kilometers(value: Optional[float]) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{format_grouped_number(value)} km²"


def _to_datetime(epoch_seconds: int, tz: Optional[tzinfo]) -> datetime:
    return datetime.fromtimestamp(epoch_seconds, tz)


def format_time(epoch_seconds: int, tz: Optional[tzinfo] = None) -> str:
    """12-hour clock with seconds, e.g. ``6:05:09 AM``."""
    moment = _to_datetime(epoch_seconds, tz)
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"


def format_date(epoch_seconds: int, tz: Optional[tzinfo] = None) -> str:
    """Month/day/year without zero padding, e.g. ``3/7/2026``."""
    moment = _to_datetime(epoch_seconds, tz)
    return f"{moment.month}/{moment.day}/{moment.year}"


def join_or_default(values: Optional[Iterable[str]]) -> str:
    """Join display values with ``", "``; the sentinel when there are none."""
    if not values:
        return NOT_AVAILABLE
    return ", ".join(values)


def first_or_default(values: Optional[list]) -> str:
    if not values:
        return NOT_AVAILABLE
    return values[0]


def text_or_default(value: Optional[str]) -> str:
    return value if value else NOT_AVAILABLE


def capitalize_label(label: str) -> str:
    """``aFRICA`` -> ``Africa``"""
    return label[:1].upper() + label[1:].lower()
