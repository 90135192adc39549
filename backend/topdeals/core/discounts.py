from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, Optional

from topdeals.schemas.catalog import RawVariant

_ZERO = Decimal(0)
_HUNDRED = Decimal(100)


def try_parse_amount(value: Any) -> Optional[Decimal]:
    """
    Converts Shopify money amounts ("80.0", "1299.99", 42) to Decimal.
    Returns None for missing, unparseable or non-finite values (NaN, Infinity).
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not d.is_finite():
        return None
    return d


def parse_amount(value: Any) -> Decimal:
    """Same as try_parse_amount, but anything unusable counts as 0."""
    d = try_parse_amount(value)
    return _ZERO if d is None else d


def variant_discount(variant: RawVariant) -> int:
    """
    Whole-percent discount of one variant, 0 unless compare_at > price and compare_at > 0.
    Rounds half up: 12.5 -> 13.
    """
    price = parse_amount(variant.price)
    compare_at = parse_amount(variant.compare_at_price)
    if compare_at <= _ZERO or compare_at <= price:
        return 0
    pct = (compare_at - price) / compare_at * _HUNDRED
    return int(pct.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_max_discount(variants: Iterable[RawVariant]) -> int:
    """Largest variant discount of a product, 0 for no variants or none on sale."""
    return max((variant_discount(v) for v in variants), default=0)
