"""
Data models for the price adjustment engine.

Uses frozen dataclasses so inputs are hashable and results can be shared
between renders without defensive copies.
"""
import math
from dataclasses import dataclass, field, asdict
from typing import Literal, Optional, Union

PERCENTAGE = "percentage"
FIXED = "fixed"

StepKind = Literal["base", "promotion", "discount", "tax", "total"]


@dataclass(frozen=True)
class Promotion:
    """A percentage-only markdown. Several may be selected at once."""
    id: str
    name: str
    value_percent: Optional[float] = None
    promotion_type: str = "automatic"  # "automatic" or "coupon"
    code: Optional[str] = None


@dataclass(frozen=True)
class Discount:
    """A single markdown, percentage of the running total or a fixed amount."""
    id: str
    name: str
    kind: str  # "percentage" or "fixed"
    value: float


@dataclass(frozen=True)
class Tax:
    """A markup, percentage of the running total or a fixed amount."""
    id: str
    name: str
    kind: str  # "percentage" or "fixed"
    value: float


Modifier = Union[Promotion, Discount, Tax]


@dataclass(frozen=True)
class PriceInput:
    """Base amount plus the modifiers selected in the product form."""
    base_amount: float
    promotions: tuple[Promotion, ...] = ()
    discount: Optional[Discount] = None
    taxes: tuple[Tax, ...] = ()

    # Shown as the base step's detail (where the base amount came from)
    base_detail: Optional[str] = None

    def __post_init__(self):
        # Accept lists from callers but keep the instance hashable
        object.__setattr__(self, 'promotions', tuple(self.promotions))
        object.__setattr__(self, 'taxes', tuple(self.taxes))


@dataclass(frozen=True)
class AdjustmentStep:
    """A single entry in the price ledger."""
    id: str
    label: str
    kind: StepKind
    delta: float
    running_total: float
    detail: Optional[str] = None


@dataclass(frozen=True)
class PricePreviewResult:
    """Complete result of a price preview: the ledger and the final total."""
    steps: tuple[AdjustmentStep, ...] = field(default_factory=tuple)
    final_total: float = 0.0

    def get_trace_text(self) -> str:
        """Get human-readable ledger as formatted text."""
        lines = []
        for step in self.steps:
            if step.kind in ("base", "total"):
                lines.append(f"• {step.label} = ${step.running_total:,.2f}")
            else:
                sign = "+" if step.delta >= 0 else "-"
                lines.append(
                    f"• {step.label}: {sign}${abs(step.delta):,.2f} → ${step.running_total:,.2f}"
                )
            if step.detail:
                lines.append(f"    {step.detail}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict (overflowed amounts become None)."""
        def json_number(value):
            if isinstance(value, float) and not math.isfinite(value):
                return None
            return value

        steps = []
        for step in self.steps:
            data = asdict(step)
            data["delta"] = json_number(data["delta"])
            data["running_total"] = json_number(data["running_total"])
            steps.append(data)

        return {
            "steps": steps,
            "final_total": json_number(self.final_total),
        }
