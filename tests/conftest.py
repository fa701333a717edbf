import sys
import os
import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from price_preview.catalog import ModifierCatalog


@pytest.fixture
def catalog():
    """Catalog as the backend would return it for one store."""
    return ModifierCatalog.from_records(
        promotions=[
            {"id": "p1", "name": "Summer Sale", "type": "automatic", "value": 10, "status": "active"},
            {"id": "p2", "name": "Welcome", "type": "coupon", "value": 5, "code": "HI5", "status": "active"},
            {"id": "p3", "name": "Expired", "type": "automatic", "value": 50, "status": "inactive"},
        ],
        discounts=[
            {"id": "d-pct", "name": "Ten Off", "type": "percentage", "value": 10, "status": "active"},
            {"id": "d-fix", "name": "Minus 25", "type": "fixed", "value": 25, "status": "active"},
        ],
        taxes=[
            {"id": "t-vat", "name": "VAT", "type": "percentage", "rate": 18, "status": "active"},
            {"id": "t-eco", "name": "Eco", "type": "fixed", "rate": 10, "status": "active"},
            {"id": "t-old", "name": "Old", "type": "percentage", "rate": 2, "status": "inactive"},
        ],
    )
