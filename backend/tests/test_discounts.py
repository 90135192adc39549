from decimal import Decimal

import pytest

from topdeals.core.discounts import compute_max_discount, parse_amount, try_parse_amount, variant_discount

from helpers import make_variant


def test_twenty_percent_off():
    assert variant_discount(make_variant("80", "100")) == 20


def test_inverted_prices_do_not_qualify():
    assert variant_discount(make_variant("100", "80")) == 0


def test_equal_prices_do_not_qualify():
    assert variant_discount(make_variant("50.00", "50.00")) == 0


def test_max_across_variants():
    variants = [make_variant("80", "100"), make_variant("50", "100", vid="v2")]
    assert compute_max_discount(variants) == 50


def test_empty_variant_list_is_zero():
    assert compute_max_discount([]) == 0


def test_missing_compare_at_is_zero():
    assert compute_max_discount([make_variant("19.99", None)]) == 0


def test_zero_compare_at_never_qualifies():
    # negative price would otherwise look like a discount
    assert variant_discount(make_variant("-5", "0")) == 0


def test_malformed_amounts_degrade_to_zero():
    assert variant_discount(make_variant("abc", "100")) == 100
    assert variant_discount(make_variant("80", "not-a-number")) == 0
    assert variant_discount(make_variant("NaN", "Infinity")) == 0


def test_rounds_half_up():
    # 12.5% -> 13, 12.4% -> 12
    assert variant_discount(make_variant("87.5", "100")) == 13
    assert variant_discount(make_variant("87.6", "100")) == 12


def test_decimal_arithmetic_is_exact():
    # (29.99 - 19.99) / 29.99 = 33.344...%
    assert variant_discount(make_variant("19.99", "29.99")) == 33


def test_adding_a_variant_never_lowers_the_result():
    base = [make_variant("70", "100")]
    before = compute_max_discount(base)
    for extra in [("90", "100"), ("100", "80"), (None, None), ("10", "100")]:
        after = compute_max_discount(base + [make_variant(*extra, vid="extra")])
        assert after >= before


@pytest.mark.parametrize("raw,expected", [
    ("80.0", Decimal("80.0")),
    (" 12.50 ", Decimal("12.50")),
    (42, Decimal(42)),
    (None, Decimal(0)),
    ("", Decimal(0)),
    ("$12", Decimal(0)),
    (True, Decimal(0)),
])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_try_parse_amount_keeps_missing_apart_from_zero():
    assert try_parse_amount(None) is None
    assert try_parse_amount("junk") is None
    assert try_parse_amount("0") == Decimal(0)
