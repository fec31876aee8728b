import re
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any

from django_razorpay.constants import PAISE_PER_RUPEE

_NON_PRICE_CHARS = re.compile(r"[^\d.]")


def parse_price(value: Any) -> Decimal | None:
    """
    Parse a stored display price into a Decimal.

    Every character other than digits and "." is dropped, so "₹1,599"
    becomes Decimal("1599").

    Returns:
        Decimal price, or None if nothing numeric remains
    """
    if value is None:
        return None

    cleaned = _NON_PRICE_CHARS.sub("", str(value))
    if not cleaned:
        return None

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def floor_amount(value: Decimal) -> Decimal:
    """Round a currency amount down to a whole unit."""
    return value.to_integral_value(rounding=ROUND_FLOOR)


def to_paise(amount: Decimal) -> int:
    return int(floor_amount(amount * PAISE_PER_RUPEE))


def get_user_id(request) -> str | None:
    """Identifier of the authenticated user, used only to tag records."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return None
    return str(user.pk)


def chunked(values: list, size: int):
    for start in range(0, len(values), size):
        yield values[start : start + size]


def money_to_json(amount: Decimal) -> int | float:
    """Render a Decimal amount as a JSON number."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)
