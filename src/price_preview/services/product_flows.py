"""
Product Flows - the two product form call sites of the adjustment engine.

Both flows build a PriceInput from raw form state and the modifier catalog,
run the same engine, and send its final total as "priceFinal" to the
product persistence API. The only difference between them is explicit:
creation never passes promotions, editing passes the selected ones.
"""
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..catalog.modifier_catalog import ModifierCatalog
from ..engine.models import PriceInput, PricePreviewResult

ENTERED_PRICE_DETAIL = "Price entered in the form"
STORED_PRICE_DETAIL = "Currently stored price"


def parse_price_text(text: Optional[str]) -> Optional[float]:
    """
    Parse the free-text price field.

    Returns None when the field is empty or not a number. Infinite values
    are returned as-is; callers sanitize them.
    """
    if text is None:
        return None
    text = str(text).strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


def _sanitize_base(value: Optional[float]) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return max(value, 0.0)


@dataclass
class PersistedProduct:
    """The parts of a stored product record the edit flow reads."""
    id: str
    price: Optional[float] = None
    price_final: Optional[float] = None
    discount_id: Optional[str] = None
    taxes: list[dict] = field(default_factory=list)
    promotions: list[dict] = field(default_factory=list)

    @classmethod
    def from_api(cls, record: dict) -> 'PersistedProduct':
        """Create from a backend product record (camelCase keys)."""
        def number(value) -> Optional[float]:
            if value is None or isinstance(value, bool):
                return None
            try:
                return float(value)
            except (TypeError, ValueError):
                return None

        return cls(
            id=str(record.get('id', '')),
            price=number(record.get('price')),
            price_final=number(record.get('priceFinal')),
            discount_id=record.get('discountId') or None,
            taxes=list(record.get('taxes') or []),
            promotions=list(record.get('promotions') or []),
        )


def initial_edit_selection(product: PersistedProduct) -> dict:
    """Form selection pre-filled from the stored product: active taxes/promotions and its discount."""
    return {
        'tax_ids': [t['id'] for t in product.taxes if t.get('status') == 'active'],
        'promotion_ids': [p['id'] for p in product.promotions if p.get('status') == 'active'],
        'discount_id': product.discount_id,
    }


def create_flow_input(
    price_text: Optional[str],
    catalog: ModifierCatalog,
    discount_id: Optional[str] = None,
    tax_ids: Iterable[str] = (),
) -> PriceInput:
    """
    Build the engine input for the product creation form.

    Promotions can only be attached once the product exists, so this flow
    always passes an empty promotion list.
    """
    return PriceInput(
        base_amount=_sanitize_base(parse_price_text(price_text)),
        promotions=(),
        discount=catalog.get_discount(discount_id),
        taxes=catalog.select_taxes(tax_ids),
        base_detail=ENTERED_PRICE_DETAIL,
    )


def edit_flow_input(
    price_text: Optional[str],
    product: PersistedProduct,
    catalog: ModifierCatalog,
    promotion_ids: Iterable[str] = (),
    discount_id: Optional[str] = None,
    tax_ids: Iterable[str] = (),
) -> PriceInput:
    """
    Build the engine input for the product edit form.

    An empty or non-numeric price field falls back to the stored price,
    then the stored final price, then 0.
    """
    entered = parse_price_text(price_text)
    if entered is not None:
        base, detail = entered, ENTERED_PRICE_DETAIL
    else:
        stored = product.price if product.price is not None else product.price_final
        base, detail = stored, STORED_PRICE_DETAIL

    return PriceInput(
        base_amount=_sanitize_base(base),
        promotions=catalog.select_promotions(promotion_ids),
        discount=catalog.get_discount(discount_id),
        taxes=catalog.select_taxes(tax_ids),
        base_detail=detail,
    )


def _final_price(preview: PricePreviewResult) -> float:
    # An overflowed total is never persisted
    return preview.final_total if math.isfinite(preview.final_total) else 0.0


def create_payload(
    price_text: Optional[str],
    preview: PricePreviewResult,
    discount_id: Optional[str] = None,
    tax_ids: Iterable[str] = (),
) -> dict:
    """Pricing fields of a product create request."""
    return {
        'price': _sanitize_base(parse_price_text(price_text)),
        'priceFinal': _final_price(preview),
        'taxes': list(tax_ids),
        'discountId': discount_id or None,
    }


def update_payload(
    price_text: Optional[str],
    preview: PricePreviewResult,
    discount_id: Optional[str] = None,
    tax_ids: Iterable[str] = (),
    promotion_ids: Iterable[str] = (),
) -> dict:
    """
    Pricing fields of a product update request.

    "price" is what the seller typed (0 when empty), like on creation; the
    stored-price fallback only feeds the preview's base amount.
    """
    return {
        **create_payload(price_text, preview, discount_id, tax_ids),
        'promotionIds': list(promotion_ids),
    }
