"""Catalog subpackage - store modifiers available to the product form."""
from .modifier_catalog import ModifierCatalog

__all__ = ['ModifierCatalog']
