"""
Price Adjustment Engine - staged sale price resolution with a ledger.

Pipeline (fixed, linear):
    BASE → PROMOTION* → DISCOUNT? → TAX* → TOTAL

Percentages always apply to the running total at that point of the pipeline,
fixed amounts are added/subtracted as-is, and the running total is clamped
at zero after every stage. No rounding happens here; formatting is left to
whoever displays the ledger.

The engine never raises. A modifier with a malformed value or an unknown kind
still gets its ledger entry, with a zero delta.
"""
from .models import (
    PriceInput,
    Promotion,
    Discount,
    Tax,
    Modifier,
    AdjustmentStep,
    PricePreviewResult,
    PERCENTAGE,
    FIXED,
)
from .details import promotion_detail, discount_detail, tax_detail, is_finite_number

BASE_LABEL = "Base price"
TOTAL_LABEL = "Estimated total"


def _clamp(value: float) -> float:
    # NaN (inf - inf after an overflow) collapses to zero as well
    return value if value > 0 else 0.0


def _modifier_delta(modifier: Modifier, running: float) -> float:
    """
    Signed change a single modifier applies to the running total.

    Promotions and discounts subtract, taxes add.
    """
    if isinstance(modifier, Promotion):
        pct = modifier.value_percent
        if not is_finite_number(pct) or pct <= 0:
            return 0.0
        return -(running * pct / 100)

    if isinstance(modifier, (Discount, Tax)):
        if not is_finite_number(modifier.value):
            return 0.0
        if modifier.kind == PERCENTAGE:
            change = running * modifier.value / 100
        elif modifier.kind == FIXED:
            change = float(modifier.value)
        else:
            return 0.0
        return -change if isinstance(modifier, Discount) else change

    return 0.0


def _apply(modifier: Modifier, kind: str, label: str, detail: str, running: float) -> AdjustmentStep:
    delta = _modifier_delta(modifier, running)
    return AdjustmentStep(
        id=f"{kind}-{modifier.id}",
        label=f"{label}: {modifier.name}",
        kind=kind,
        delta=delta,
        running_total=_clamp(running + delta),
        detail=detail,
    )


def compute(price_input: PriceInput) -> PricePreviewResult:
    """
    Run the adjustment pipeline for one product price.

    Args:
        price_input: Base amount and the selected modifiers, in selection order

    Returns:
        PricePreviewResult whose steps start with "base" and end with "total"
    """
    base = price_input.base_amount
    if not is_finite_number(base):
        base = 0.0
    running = _clamp(float(base))

    steps = [AdjustmentStep(
        id="base",
        label=BASE_LABEL,
        kind="base",
        delta=0.0,
        running_total=running,
        detail=price_input.base_detail,
    )]

    for promotion in price_input.promotions:
        step = _apply(promotion, "promotion", "Promotion", promotion_detail(promotion), running)
        running = step.running_total
        steps.append(step)

    if price_input.discount is not None:
        discount = price_input.discount
        step = _apply(discount, "discount", "Discount", discount_detail(discount), running)
        running = step.running_total
        steps.append(step)

    for tax in price_input.taxes:
        step = _apply(tax, "tax", "Tax", tax_detail(tax), running)
        running = step.running_total
        steps.append(step)

    steps.append(AdjustmentStep(
        id="total",
        label=TOTAL_LABEL,
        kind="total",
        delta=0.0,
        running_total=running,
    ))

    return PricePreviewResult(steps=tuple(steps), final_total=running)
