"""
Lenient value coercion for imported and hand-entered shipment data.
"""
import math
import re
from datetime import date, datetime
from typing import Any, Optional, Union

Number = Union[int, float]

_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{1,2})$")


def to_number(value: Any, default: Number = 0) -> Number:
    """Coerce a wire value to a number, falling back to ``default``.

    Integral results come back as ``int`` so quantities stay whole numbers.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default

    if math.isnan(number) or math.isinf(number):
        return default
    return int(number) if number.is_integer() else number


def to_optional_number(value: Any) -> Optional[Number]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_number(value)


def parse_wire_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date/datetime (or ``YYYY-MM``) sent by the client."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = str(value).strip()
    if not text:
        return None

    match = _YEAR_MONTH.match(text)
    if match:
        return datetime(int(match.group(1)), int(match.group(2)), 1)

    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"Invalid date: '{value}'") from exc
