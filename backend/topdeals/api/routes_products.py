import logging
from typing import Callable, Optional, Union

from fastapi import APIRouter, Depends, Response

from topdeals.core.aggregator import collect_candidates
from topdeals.core.config import StorefrontConfig, settings
from topdeals.core.errors import ApiError
from topdeals.core.ranking import rank
from topdeals.core.storefront import StorefrontClient
from topdeals.schemas.products import (
    EnvCheckResponse,
    ErrorResponse,
    ProductsMeta,
    ProductsResponse,
    RequestParams,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["products"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def get_storefront_config() -> StorefrontConfig:
    return StorefrontConfig.from_settings(settings)


def get_client_factory() -> Callable[[StorefrontConfig], StorefrontClient]:
    """Overridden in tests to hand back a fake page fetcher."""
    return StorefrontClient


@router.options("/products", status_code=204)
def products_preflight():
    return Response(status_code=204, headers=CORS_HEADERS)


@router.get(
    "/products",
    response_model=Union[ProductsResponse, EnvCheckResponse],
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def products(
    collection: Optional[str] = None,
    query: Optional[str] = None,
    limit: Optional[str] = None,
    factor: Optional[str] = None,
    check: Optional[str] = None,
    config: StorefrontConfig = Depends(get_storefront_config),
    client_factory: Callable[[StorefrontConfig], StorefrontClient] = Depends(get_client_factory),
):
    """
    Returns the `limit` most discounted products of a collection or search.

    Pulls up to limit * factor raw products from Shopify, drops the ones with no
    discounted variant, sorts by maxDiscount (highest first) and slices.
    `?check=env` reports whether Shopify settings are present without touching Shopify.
    """
    # Quick env check (never echoes the token)
    if check == "env":
        return EnvCheckResponse(store_domain=config.store_domain or None, token_present=bool(config.token))

    # ConfigurationError / QuerySpecError are rendered by the app's handlers
    client = client_factory(config)
    params = RequestParams.from_query(collection=collection, query=query, limit=limit, factor=factor)

    try:
        raw_nodes = await collect_candidates(params.spec, params.limit, params.factor, client.fetch_page)
        top = rank(raw_nodes, params.limit, client.store_base_url)
    except Exception as e:
        logger.exception("Ranking failed for %s", params.spec)
        raise ApiError(500, "Internal error", detail=str(e))

    logger.info(
        "collection=%r query=%r limit=%d factor=%d: %d candidates -> %d products",
        params.spec.collection, params.spec.query, params.limit, params.factor, len(raw_nodes), len(top),
    )

    return ProductsResponse(
        meta=ProductsMeta(
            collection=params.spec.collection,
            query=params.spec.query,
            limit=params.limit,
            factor=params.factor,
        ),
        products=top,
    )
