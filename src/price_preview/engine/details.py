"""
Detail text for ledger steps.

Formatting helpers never raise: anything that is not a finite number
renders as "-".
"""
import math

from .models import Promotion, Discount, Tax, PERCENTAGE


def is_finite_number(value) -> bool:
    """True for real ints/floats that are neither NaN nor infinite (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def format_percentage(value) -> str:
    if not is_finite_number(value):
        return "-"
    text = f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{text}%"


def format_currency(value) -> str:
    if not is_finite_number(value):
        return "-"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def promotion_detail(promotion: Promotion) -> str:
    segments = []
    if promotion.promotion_type == "coupon":
        segments.append("Coupon")
        if promotion.code:
            segments.append(f"Code {promotion.code}")
    else:
        segments.append("Automatic promotion")

    if is_finite_number(promotion.value_percent):
        segments.append(f"Value {format_percentage(promotion.value_percent)}")
    return " - ".join(segments)


def discount_detail(discount: Discount) -> str:
    if discount.kind == PERCENTAGE:
        return f"{format_percentage(discount.value)} off the subtotal"
    return f"Fixed discount of {format_currency(discount.value)} on the subtotal"


def tax_detail(tax: Tax) -> str:
    if tax.kind == PERCENTAGE:
        return f"Adds {format_percentage(tax.value)} on the subtotal"
    return f"Fixed increase of {format_currency(tax.value)}"
