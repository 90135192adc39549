"""Builders for raw catalog records and a scripted page fetcher."""

from typing import List, Optional, Sequence, Tuple

from topdeals.schemas.catalog import PageResult, RawImage, RawProductNode, RawVariant
from topdeals.schemas.products import QuerySpec


def make_variant(price: Optional[str], compare_at: Optional[str] = None, vid: str = "v1") -> RawVariant:
    return RawVariant(id=vid, title="Default", price=price, compare_at_price=compare_at, currency="USD")


def make_node(
    handle: str,
    variants: Sequence[Tuple[Optional[str], Optional[str]]] = (),
    url: Optional[str] = None,
    image: Optional[RawImage] = None,
) -> RawProductNode:
    """variants is a list of (price, compare_at) string pairs."""
    return RawProductNode(
        id=f"gid://shopify/Product/{handle}",
        handle=handle,
        title=handle.replace("-", " ").title(),
        online_store_url=url,
        image=image,
        price_min=variants[0][0] if variants else None,
        price_max=variants[-1][0] if variants else None,
        currency="USD",
        variants=[make_variant(p, c, vid=f"{handle}-v{i}") for i, (p, c) in enumerate(variants)],
    )


def make_discounted(handle: str, pct: int) -> RawProductNode:
    """A product with a single variant discounted by exactly pct percent."""
    return make_node(handle, [(str(100 - pct), "100")])


class ScriptedFetcher:
    """
    Page fetcher that replays a fixed list of pages and records every call.
    Also stands in for StorefrontClient (fetch_page + store_base_url).
    """

    store_base_url = "https://shop.example.com"

    def __init__(self, pages: List[PageResult], error: Optional[Exception] = None, fail_on_call: int = 0):
        self.pages = pages
        self.error = error
        self.fail_on_call = fail_on_call
        self.calls: List[Tuple[QuerySpec, Optional[str]]] = []

    async def fetch_page(self, spec: QuerySpec, cursor: Optional[str] = None) -> PageResult:
        self.calls.append((spec, cursor))
        if self.error is not None and len(self.calls) >= self.fail_on_call:
            raise self.error
        return self.pages[len(self.calls) - 1]


def paged(nodes: List[RawProductNode], page_size: int) -> List[PageResult]:
    """Splits nodes into cursor-linked pages the way Storefront does."""
    pages = []
    for start in range(0, len(nodes), page_size):
        chunk = nodes[start:start + page_size]
        last = start + page_size >= len(nodes)
        pages.append(PageResult(
            nodes=chunk,
            has_next_page=not last,
            end_cursor=None if last else f"cursor-{start + page_size}",
        ))
    return pages or [PageResult()]
