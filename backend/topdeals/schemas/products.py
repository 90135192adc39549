import re
from pydantic import BaseModel, ConfigDict, model_validator
from typing import Optional, List

from topdeals.core.errors import QuerySpecError
from topdeals.schemas.catalog import NormalizedProduct

LIMIT_DEFAULT, LIMIT_MIN, LIMIT_MAX = 50, 1, 250
FACTOR_DEFAULT, FACTOR_MIN, FACTOR_MAX = 2, 1, 6

MISSING_SPEC_MESSAGE = "Provide ?collection=handle or ?query=term"
BOTH_SPEC_MESSAGE = "Provide only one of ?collection=handle or ?query=term"


class QuerySpec(BaseModel):
    """Exactly one of a collection handle or a free-text search term."""
    model_config = ConfigDict(frozen=True)

    collection: Optional[str] = None
    query: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "QuerySpec":
        if bool(self.collection) == bool(self.query):
            raise ValueError(MISSING_SPEC_MESSAGE if not self.collection else BOTH_SPEC_MESSAGE)
        return self

    @classmethod
    def from_params(cls, collection: Optional[str], query: Optional[str]) -> "QuerySpec":
        """
        Builds a QuerySpec from raw query-string values.
        Blank values count as missing. Raises QuerySpecError instead of a pydantic
        ValidationError so the route can map it straight to a 400.
        """
        collection = (collection or "").strip() or None
        query = (query or "").strip() or None
        if not collection and not query:
            raise QuerySpecError(MISSING_SPEC_MESSAGE)
        if collection and query:
            raise QuerySpecError(BOTH_SPEC_MESSAGE)
        return cls(collection=collection, query=query)

    @property
    def is_collection(self) -> bool:
        return self.collection is not None


def _parse_int(raw: Optional[str], default: int) -> int:
    """
    Leading-integer parse: "12", " 12 ", "12abc" -> 12.
    Anything without a leading integer falls back to default.
    """
    if raw is None:
        return default
    m = re.match(r"\s*([+-]?\d+)", str(raw))
    if not m:
        return default
    return int(m.group(1))


def _clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


class RequestParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    spec: QuerySpec
    limit: int = LIMIT_DEFAULT
    factor: int = FACTOR_DEFAULT

    @classmethod
    def from_query(
        cls,
        collection: Optional[str] = None,
        query: Optional[str] = None,
        limit: Optional[str] = None,
        factor: Optional[str] = None,
    ) -> "RequestParams":
        return cls(
            spec=QuerySpec.from_params(collection, query),
            limit=_clamp(_parse_int(limit, LIMIT_DEFAULT), LIMIT_MIN, LIMIT_MAX),
            factor=_clamp(_parse_int(factor, FACTOR_DEFAULT), FACTOR_MIN, FACTOR_MAX),
        )


class ProductsMeta(BaseModel):
    collection: Optional[str] = None
    query: Optional[str] = None
    limit: int
    factor: int


class ProductsResponse(BaseModel):
    meta: ProductsMeta
    products: List[NormalizedProduct]


class EnvCheckResponse(BaseModel):
    store_domain: Optional[str] = None
    token_present: bool


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
