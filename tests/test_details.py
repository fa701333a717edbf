import pytest

from price_preview.engine.details import (
    format_percentage,
    format_currency,
    promotion_detail,
    discount_detail,
    tax_detail,
)
from price_preview.engine import Promotion, Discount, Tax


@pytest.mark.parametrize("value, expected", [
    (10, "10%"),
    (12.5, "12.5%"),
    (33.333, "33.33%"),
    (1500, "1,500%"),
    (float("nan"), "-"),
    ("abc", "-"),
    (None, "-"),
])
def test_format_percentage(value, expected):
    assert format_percentage(value) == expected


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-3) == "-$3.00"
    assert format_currency(float("inf")) == "-"


def test_promotion_detail():
    automatic = Promotion(id="p", name="Summer", value_percent=10)
    coupon = Promotion(id="c", name="Welcome", value_percent=5, promotion_type="coupon", code="HI5")
    unvalued = Promotion(id="u", name="Launch")

    assert promotion_detail(automatic) == "Automatic promotion - Value 10%"
    assert promotion_detail(coupon) == "Coupon - Code HI5 - Value 5%"
    assert promotion_detail(unvalued) == "Automatic promotion"


def test_discount_and_tax_detail():
    assert discount_detail(Discount(id="d", name="D", kind="percentage", value=10)) == "10% off the subtotal"
    assert discount_detail(Discount(id="d", name="D", kind="fixed", value=25)) == \
        "Fixed discount of $25.00 on the subtotal"
    assert tax_detail(Tax(id="t", name="T", kind="percentage", value=18)) == "Adds 18% on the subtotal"
    assert tax_detail(Tax(id="t", name="T", kind="fixed", value=10)) == "Fixed increase of $10.00"
