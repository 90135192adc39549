from pydantic import BaseModel, ConfigDict
from typing import Optional, List


# --- Upstream shapes (decoded once, at the Storefront client boundary) ---

class RawVariant(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    price: Optional[str] = None             # raw amount string, e.g. "80.00"
    compare_at_price: Optional[str] = None  # raw list-price amount, absent when not on sale
    currency: Optional[str] = None


class RawImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: Optional[str] = None
    alt_text: Optional[str] = None


class RawProductNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    handle: str
    title: str = ""
    online_store_url: Optional[str] = None
    image: Optional[RawImage] = None
    price_min: Optional[str] = None
    price_max: Optional[str] = None
    currency: Optional[str] = None
    variants: List[RawVariant] = []


class PageResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: List[RawProductNode] = []
    has_next_page: bool = False
    end_cursor: Optional[str] = None
    not_found: bool = False  # collection handle did not resolve


# --- Output shapes ---

class NormalizedVariant(BaseModel):
    id: str
    title: str
    price: float
    compare_at_price: Optional[float] = None
    currency: Optional[str] = None


class NormalizedProduct(BaseModel):
    id: str
    handle: str
    title: str
    url: str
    image: Optional[str] = None
    image_alt: Optional[str] = None
    price_min: float = 0.0
    price_max: float = 0.0
    currency: Optional[str] = None
    variants: List[NormalizedVariant] = []
    maxDiscount: int = 0  # whole percent, 0 when no variant is discounted
