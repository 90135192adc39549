import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from topdeals.core.config import StorefrontConfig
from topdeals.core.errors import ConfigurationError, UpstreamError
from topdeals.schemas.catalog import PageResult, RawImage, RawProductNode, RawVariant
from topdeals.schemas.products import QuerySpec

logger = logging.getLogger(__name__)

PAGE_SIZE = 250
VARIANTS_PER_PRODUCT = 100

PRODUCT_FIELDS = """
fragment ProductFields on Product {
  id
  handle
  title
  onlineStoreUrl
  featuredImage { url altText }
  priceRange {
    minVariantPrice { amount currencyCode }
    maxVariantPrice { amount currencyCode }
  }
  variants(first: $variantsFirst) {
    edges {
      node {
        id
        title
        price { amount currencyCode }
        compareAtPrice { amount currencyCode }
      }
    }
  }
}
"""

COLLECTION_QUERY = PRODUCT_FIELDS + """
query CollectionProducts($handle: String!, $first: Int!, $after: String, $variantsFirst: Int!) {
  collection(handle: $handle) {
    products(first: $first, after: $after) {
      pageInfo { hasNextPage endCursor }
      edges { node { ...ProductFields } }
    }
  }
}
"""

SEARCH_QUERY = PRODUCT_FIELDS + """
query SearchProducts($query: String!, $first: Int!, $after: String, $variantsFirst: Int!) {
  products(first: $first, after: $after, query: $query) {
    pageInfo { hasNextPage endCursor }
    edges { node { ...ProductFields } }
  }
}
"""


def _edges(conn: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    edges = (conn or {}).get("edges", []) or []
    return [e.get("node") for e in edges if isinstance(e, dict) and isinstance(e.get("node"), dict)]


def _amount(money: Optional[Dict[str, Any]]) -> Optional[str]:
    """Storefront money is {"amount": "80.0", "currencyCode": "USD"}; keep the raw string."""
    if not isinstance(money, dict) or money.get("amount") is None:
        return None
    return str(money["amount"])


def _currency(money: Optional[Dict[str, Any]]) -> Optional[str]:
    if not isinstance(money, dict):
        return None
    return money.get("currencyCode") or None


def _decode_variant(v: Dict[str, Any]) -> RawVariant:
    price = v.get("price")
    return RawVariant(
        id=str(v.get("id") or ""),
        title=v.get("title") or "",
        price=_amount(price),
        compare_at_price=_amount(v.get("compareAtPrice")),
        currency=_currency(price),
    )


def _decode_node(n: Dict[str, Any]) -> RawProductNode:
    """
    Decodes one GraphQL product node into a RawProductNode.
    Missing nested objects become None; numbers stay raw strings for the normalizer.
    """
    img = n.get("featuredImage")
    price_range = n.get("priceRange") or {}
    min_price = price_range.get("minVariantPrice")
    return RawProductNode(
        id=str(n.get("id") or ""),
        handle=n.get("handle") or "",
        title=n.get("title") or "",
        online_store_url=n.get("onlineStoreUrl") or None,
        image=RawImage(url=img.get("url"), alt_text=img.get("altText")) if isinstance(img, dict) else None,
        price_min=_amount(min_price),
        price_max=_amount(price_range.get("maxVariantPrice")),
        currency=_currency(min_price),
        variants=[_decode_variant(v) for v in _edges(n.get("variants"))],
    )


def decode_page(conn: Optional[Dict[str, Any]]) -> PageResult:
    """Turns a `products` connection ({pageInfo, edges}) into a PageResult."""
    page_info = (conn or {}).get("pageInfo") or {}
    return PageResult(
        nodes=[_decode_node(n) for n in _edges(conn)],
        has_next_page=bool(page_info.get("hasNextPage")),
        end_cursor=page_info.get("endCursor") or None,
    )


class StorefrontClient:
    """
    Page fetcher backed by the Shopify Storefront GraphQL API.
    One instance per request; each call opens its own httpx client.
    `transport` exists so tests can plug in httpx.MockTransport.
    """

    def __init__(self, config: StorefrontConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        if not config.is_complete():
            raise ConfigurationError("Missing Shopify env vars")
        self.config = config
        self._transport = transport

    @property
    def store_base_url(self) -> str:
        return self.config.store_base_url

    async def gql_fetch(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        POSTs one GraphQL document and returns its `data`.
        Raises UpstreamError on non-2xx or when the payload carries `errors`.
        """
        headers = {
            "X-Shopify-Storefront-Access-Token": self.config.token,
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(timeout=self.config.timeout_seconds, transport=self._transport) as client:
            r = await client.post(
                self.config.endpoint,
                headers=headers,
                json={"query": query, "variables": variables},
            )
            if r.is_error:
                raise UpstreamError(
                    f"Shopify error: {r.status_code} {r.reason_phrase} :: {r.text}",
                    status_code=r.status_code,
                    body=r.text,
                )
            try:
                payload = r.json()
            except ValueError:
                raise UpstreamError(f"Shopify returned non-JSON body: {r.text[:500]}", status_code=r.status_code, body=r.text)

        if not isinstance(payload, dict):
            raise UpstreamError(f"Unexpected Shopify response shape: {json.dumps(payload)[:500]}", status_code=r.status_code)

        if payload.get("errors"):
            raise UpstreamError(json.dumps(payload["errors"]), status_code=r.status_code)

        return payload.get("data") or {}

    async def fetch_page(self, spec: QuerySpec, cursor: Optional[str] = None) -> PageResult:
        variables: Dict[str, Any] = {
            "first": PAGE_SIZE,
            "after": cursor,
            "variantsFirst": VARIANTS_PER_PRODUCT,
        }

        if spec.is_collection:
            variables["handle"] = spec.collection
            data = await self.gql_fetch(COLLECTION_QUERY, variables)
            collection = data.get("collection")
            if not collection:
                return PageResult(not_found=True)
            page = decode_page(collection.get("products"))
        else:
            variables["query"] = spec.query
            data = await self.gql_fetch(SEARCH_QUERY, variables)
            page = decode_page(data.get("products"))

        logger.debug(
            "Storefront page (%s): %d nodes, hasNextPage=%s",
            "collection" if spec.is_collection else "search", len(page.nodes), page.has_next_page,
        )
        return page
