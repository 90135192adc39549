import logging
from typing import Awaitable, Callable, List, Optional

from topdeals.schemas.catalog import PageResult, RawProductNode
from topdeals.schemas.products import QuerySpec

logger = logging.getLogger(__name__)

# fetch_page(spec, cursor) -> PageResult; raises on transport/GraphQL errors
PageFetcher = Callable[[QuerySpec, Optional[str]], Awaitable[PageResult]]


async def collect_candidates(
    spec: QuerySpec,
    limit: int,
    factor: int,
    fetch_page: PageFetcher,
) -> List[RawProductNode]:
    """
    Pulls pages one at a time until limit * factor raw products are collected
    or Shopify reports no more pages.

    - The target is only checked between pages, so the last page is kept whole
      and the result may overshoot by up to one page.
    - A collection handle that does not resolve ends the loop with what we have.
    - Errors from fetch_page are not caught here.
    """
    target = limit * factor
    out: List[RawProductNode] = []
    cursor: Optional[str] = None
    has_next = True
    pages = 0

    while has_next and len(out) < target:
        page = await fetch_page(spec, cursor)
        pages += 1

        if page.not_found:
            logger.info("Collection %r not found; stopping after %d candidates", spec.collection, len(out))
            break

        out.extend(page.nodes)
        has_next = page.has_next_page
        cursor = page.end_cursor

        logger.debug(
            "Page %d: +%d nodes (total %d/%d), has_next=%s",
            pages, len(page.nodes), len(out), target, has_next,
        )

        # hasNextPage without a cursor would refetch page one forever
        if has_next and not cursor:
            logger.warning("Upstream reported another page but no endCursor; stopping")
            break

    return out
