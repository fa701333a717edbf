"""Engine subpackage - staged price adjustment logic."""
from .price_adjustment_engine import compute
from .models import (
    Promotion,
    Discount,
    Tax,
    Modifier,
    PriceInput,
    AdjustmentStep,
    PricePreviewResult,
)

__all__ = [
    'compute',
    'Promotion',
    'Discount',
    'Tax',
    'Modifier',
    'PriceInput',
    'AdjustmentStep',
    'PricePreviewResult',
]
