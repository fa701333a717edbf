"""
Create and edit product flows: how form state becomes engine input and payload.
"""
import pytest

from price_preview.engine import compute
from price_preview.services.product_flows import (
    PersistedProduct,
    parse_price_text,
    initial_edit_selection,
    create_flow_input,
    edit_flow_input,
    create_payload,
    update_payload,
    ENTERED_PRICE_DETAIL,
    STORED_PRICE_DETAIL,
)


@pytest.mark.parametrize("text, expected", [
    ("100", 100.0),
    (" 12.50 ", 12.5),
    ("", None),
    ("   ", None),
    (None, None),
    ("abc", None),
    ("nan", None),
    ("-5", -5.0),
])
def test_parse_price_text(text, expected):
    assert parse_price_text(text) == expected


def test_create_flow_never_passes_promotions(catalog):
    price_input = create_flow_input("1000", catalog, discount_id="d-pct", tax_ids=["t-vat"])

    assert price_input.promotions == ()
    assert price_input.discount.id == "d-pct"
    assert [t.id for t in price_input.taxes] == ["t-vat"]
    assert price_input.base_detail == ENTERED_PRICE_DETAIL
    assert compute(price_input).final_total == pytest.approx(1062)


@pytest.mark.parametrize("text", ["", "abc", "inf", "-20"])
def test_create_flow_invalid_or_negative_price_is_zero(catalog, text):
    price_input = create_flow_input(text, catalog)
    assert price_input.base_amount == 0


def test_create_payload_has_no_promotion_field(catalog):
    price_input = create_flow_input("1000", catalog, discount_id="d-fix", tax_ids=["t-eco"])
    payload = create_payload("1000", compute(price_input), "d-fix", ["t-eco"])

    assert payload == {
        "price": 1000.0,
        "priceFinal": 985.0,
        "taxes": ["t-eco"],
        "discountId": "d-fix",
    }
    assert "promotionIds" not in payload


def test_edit_flow_uses_entered_price(catalog):
    product = PersistedProduct(id="x", price=999)
    price_input = edit_flow_input("500", product, catalog, promotion_ids=["p1"],
                                  discount_id="d-fix", tax_ids=["t-vat"])
    result = compute(price_input)

    assert price_input.base_amount == 500
    assert price_input.base_detail == ENTERED_PRICE_DETAIL
    assert result.final_total == pytest.approx(501.5)


@pytest.mark.parametrize("record, expected", [
    ({"price": 300, "priceFinal": 280}, 300),
    ({"price": None, "priceFinal": 280}, 280),
    ({}, 0),
    ({"price": "not a number"}, 0),
])
def test_edit_flow_falls_back_to_stored_price(catalog, record, expected):
    product = PersistedProduct.from_api({"id": "x", **record})
    price_input = edit_flow_input("", product, catalog)

    assert price_input.base_amount == expected
    assert price_input.base_detail == STORED_PRICE_DETAIL


def test_edit_flow_keeps_promotion_selection_order(catalog):
    product = PersistedProduct(id="x", price=100)
    price_input = edit_flow_input(None, product, catalog, promotion_ids=["p2", "p1"])

    assert [p.id for p in price_input.promotions] == ["p2", "p1"]


def test_initial_edit_selection_uses_active_entries():
    product = PersistedProduct.from_api({
        "id": "prod-1",
        "price": 100,
        "discountId": "d-pct",
        "taxes": [
            {"id": "t-vat", "status": "active"},
            {"id": "t-old", "status": "inactive"},
        ],
        "promotions": [
            {"id": "p2", "status": "active"},
            {"id": "p3", "status": "inactive"},
            {"id": "p1", "status": "active"},
        ],
    })

    assert initial_edit_selection(product) == {
        "tax_ids": ["t-vat"],
        "promotion_ids": ["p2", "p1"],
        "discount_id": "d-pct",
    }


def test_update_payload_carries_final_price_and_promotions(catalog):
    product = PersistedProduct(id="x", price=999)
    price_input = edit_flow_input("500", product, catalog, ["p1"], "d-fix", ["t-vat"])
    payload = update_payload("500", compute(price_input), "d-fix", ["t-vat"], ["p1"])

    assert payload == {
        "price": 500.0,
        "priceFinal": pytest.approx(501.5),
        "taxes": ["t-vat"],
        "discountId": "d-fix",
        "promotionIds": ["p1"],
    }


def test_update_payload_price_is_the_typed_value(catalog):
    """Stored price only feeds the preview; an empty field saves price 0."""
    product = PersistedProduct(id="x", price=500)
    price_input = edit_flow_input("", product, catalog)
    payload = update_payload("", compute(price_input))

    assert price_input.base_amount == 500
    assert payload["price"] == 0
    assert payload["priceFinal"] == 500


def test_payload_never_carries_an_overflowed_total(catalog):
    catalog_with_big_tax = type(catalog).from_records(
        taxes=[{"id": "huge", "name": "Huge", "type": "percentage", "rate": 1000, "status": "active"}],
    )
    price_input = create_flow_input("1e308", catalog_with_big_tax, tax_ids=["huge"])
    payload = create_payload("1e308", compute(price_input), tax_ids=["huge"])

    assert payload["priceFinal"] == 0
