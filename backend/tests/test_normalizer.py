from topdeals.core.normalizer import map_product, map_variant
from topdeals.schemas.catalog import RawImage, RawProductNode, RawVariant

from helpers import make_node

BASE = "https://shop.example.com"


def test_maps_flat_shape_with_discount():
    node = make_node(
        "linen-shirt",
        [("80.00", "100.00"), ("50.00", "100.00")],
        url="https://shop.example.com/products/linen-shirt",
        image=RawImage(url="https://cdn.example.com/shirt.jpg", alt_text="Linen shirt"),
    )
    p = map_product(node, BASE)

    assert p.id == "gid://shopify/Product/linen-shirt"
    assert p.handle == "linen-shirt"
    assert p.title == "Linen Shirt"
    assert p.url == "https://shop.example.com/products/linen-shirt"
    assert p.image == "https://cdn.example.com/shirt.jpg"
    assert p.image_alt == "Linen shirt"
    assert p.price_min == 80.0
    assert p.price_max == 50.0
    assert p.currency == "USD"
    assert [v.price for v in p.variants] == [80.0, 50.0]
    assert [v.compare_at_price for v in p.variants] == [100.0, 100.0]
    assert p.maxDiscount == 50


def test_url_falls_back_to_store_base_and_handle():
    p = map_product(make_node("mug", [("5", None)]), BASE + "/")
    assert p.url == "https://shop.example.com/products/mug"


def test_blank_online_store_url_uses_fallback():
    p = map_product(make_node("mug", url="   "), BASE)
    assert p.url == "https://shop.example.com/products/mug"


def test_missing_fields_use_defaults():
    node = RawProductNode(id="p1", handle="bare")
    p = map_product(node, BASE)

    assert p.price_min == 0.0
    assert p.price_max == 0.0
    assert p.currency is None
    assert p.image is None and p.image_alt is None
    assert p.variants == []
    assert p.maxDiscount == 0


def test_image_without_url_is_dropped_entirely():
    p = map_product(make_node("cap", image=RawImage(url=None, alt_text="orphan alt")), BASE)
    assert p.image is None
    assert p.image_alt is None


def test_image_without_alt_gets_empty_alt():
    p = map_product(make_node("cap", image=RawImage(url="https://cdn.example.com/cap.jpg")), BASE)
    assert p.image == "https://cdn.example.com/cap.jpg"
    assert p.image_alt == ""


def test_variant_malformed_price_defaults():
    v = map_variant(RawVariant(id="v", title="Small", price="n/a", compare_at_price="oops"))
    assert v.price == 0.0
    assert v.compare_at_price is None
    assert v.currency is None


def test_variant_zero_compare_at_is_kept_as_zero():
    v = map_variant(RawVariant(id="v", title="Small", price="10", compare_at_price="0.0"))
    assert v.compare_at_price == 0.0


def test_serializes_max_discount_key():
    p = map_product(make_node("tee", [("75", "100")]), BASE)
    assert p.model_dump()["maxDiscount"] == 25
