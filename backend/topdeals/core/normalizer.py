from typing import Any, Optional, Tuple

from topdeals.core.discounts import compute_max_discount, parse_amount, try_parse_amount
from topdeals.schemas.catalog import (
    NormalizedProduct,
    NormalizedVariant,
    RawImage,
    RawProductNode,
    RawVariant,
)


def _to_float(value: Any) -> float:
    return float(parse_amount(value))


def _to_optional_float(value: Any) -> Optional[float]:
    """Compare-at price stays absent (None) when Shopify sends nothing usable."""
    d = try_parse_amount(value)
    return None if d is None else float(d)


def _resolve_url(node: RawProductNode, store_base_url: str) -> str:
    url = (node.online_store_url or "").strip()
    if url:
        return url
    return f"{store_base_url.rstrip('/')}/products/{node.handle}"


def _resolve_image(image: Optional[RawImage]) -> Tuple[Optional[str], Optional[str]]:
    """
    Returns (url, alt) present or absent together.
    An image without a url counts as no image at all.
    """
    if image is None or not (image.url or "").strip():
        return None, None
    return image.url, image.alt_text or ""


def map_variant(v: RawVariant) -> NormalizedVariant:
    return NormalizedVariant(
        id=v.id,
        title=v.title or "",
        price=_to_float(v.price),
        compare_at_price=_to_optional_float(v.compare_at_price),
        currency=v.currency or None,
    )


def map_product(node: RawProductNode, store_base_url: str) -> NormalizedProduct:
    """
    Flattens one upstream product into the response shape and attaches maxDiscount.
    store_base_url (e.g. "https://shop.example.com") is only used when the product
    has no onlineStoreUrl.
    """
    image_url, image_alt = _resolve_image(node.image)
    return NormalizedProduct(
        id=node.id,
        handle=node.handle,
        title=node.title or "",
        url=_resolve_url(node, store_base_url),
        image=image_url,
        image_alt=image_alt,
        price_min=_to_float(node.price_min),
        price_max=_to_float(node.price_max),
        currency=node.currency or None,
        variants=[map_variant(v) for v in node.variants],
        maxDiscount=compute_max_discount(node.variants),
    )
