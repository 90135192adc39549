from typing import Iterable, List

from topdeals.core.normalizer import map_product
from topdeals.schemas.catalog import NormalizedProduct, RawProductNode


def rank(nodes: Iterable[RawProductNode], limit: int, store_base_url: str) -> List[NormalizedProduct]:
    """
    Normalize, drop products with no discount, sort by maxDiscount (highest first)
    and keep the first `limit`.
    list.sort is stable, so equal discounts keep their upstream order.
    """
    mapped = [map_product(n, store_base_url) for n in nodes]
    discounted = [p for p in mapped if p.maxDiscount > 0]
    discounted.sort(key=lambda p: p.maxDiscount, reverse=True)
    return discounted[: max(0, limit)]
