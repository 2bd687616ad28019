"""Helpers for pulling values out of untrusted JSON objects."""

from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

ZERO = Decimal("0")
UNNAMED_ITEM = "Unnamed"

# Prices beyond these bounds count as non-numeric. Keeping every price to at
# most 18 significant digits keeps cart totals exact.
MAX_PRICE = Decimal("1e12")
PRICE_QUANTUM = Decimal("0.000001")


def first_present(raw: Any, candidates: Sequence[str], skip_empty: bool = False) -> Any:
    """
    Return the value of the first candidate key present in ``raw``.

    A key counts as present when its value is not None. With ``skip_empty``,
    falsy values (``""``, ``0``, ``False``, empty containers) are skipped as
    well.

    Args:
        raw: Untrusted JSON value (only mappings are searched)
        candidates: Field names in priority order
        skip_empty: Also skip falsy values

    Returns:
        The resolved value, or None if no candidate resolves
    """
    if not isinstance(raw, Mapping):
        return None

    for key in candidates:
        value = raw.get(key)
        if value is None:
            continue
        if skip_empty and not value:
            continue
        return value

    return None


def coerce_price(value: Any) -> Decimal:
    """
    Coerce a price to Decimal; anything non-numeric becomes zero.

    Non-finite values and values above MAX_PRICE in magnitude count as
    non-numeric. Digits past PRICE_QUANTUM are rounded off.
    """
    # bool is an int subclass
    if isinstance(value, bool) or value is None:
        return ZERO

    if isinstance(value, Decimal):
        price = value
    elif isinstance(value, (int, float)):
        price = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return ZERO
        try:
            price = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not price.is_finite() or abs(price) > MAX_PRICE:
        return ZERO
    if price.as_tuple().exponent < PRICE_QUANTUM.as_tuple().exponent:
        price = price.quantize(PRICE_QUANTUM)
    return price


def coerce_text(value: Any, default: str = "") -> str:
    """Coerce a scalar to display text."""
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, list)):
        return default
    return str(value)


def coerce_identifier(value: Any) -> Optional[str]:
    """Coerce an identifier to a string, or None when it is unusable (falsy)."""
    if not value or isinstance(value, (bool, Mapping, list)):
        return None
    text = str(value).strip()
    return text or None
