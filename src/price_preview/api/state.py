"""
Shared API state: the modifier catalog loaded once per process.
"""
from ..catalog.modifier_catalog import ModifierCatalog
from ..config.settings import get_settings

catalog = ModifierCatalog.load(get_settings())
