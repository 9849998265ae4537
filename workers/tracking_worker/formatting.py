import math
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import NamedTuple


class Coordinates(NamedTuple):
    lat: float
    lng: float


def format_price(value: Decimal | str | float) -> str:
    try:
        amount = Decimal(str(value))
    except InvalidOperation as err:
        raise ValueError(f"Not a price: {value!r}") from err
    return f"€{amount.quantize(Decimal('0.01'))}"


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} min"
    hours, remaining = divmod(minutes, 60)
    return f"{hours}h {remaining}min"


def parse_timestamp(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    return datetime.fromisoformat(text)


def format_clock(value: datetime | str) -> str:
    """HH:MM in the timestamp's own timezone."""
    return parse_timestamp(value).strftime("%H:%M")


def parse_coordinates(lat, lng) -> Coordinates | None:
    if lat is None or lng is None or lat == "" or lng == "":
        return None
    try:
        lat_value = float(lat)
        lng_value = float(lng)
    except (TypeError, ValueError):
        return None
    if math.isnan(lat_value) or math.isnan(lng_value):
        return None
    return Coordinates(lat_value, lng_value)


def format_card_number(value: str) -> str:
    digits = re.sub(r"\D", "", value)[:16]
    return " ".join(digits[i : i + 4] for i in range(0, len(digits), 4))
