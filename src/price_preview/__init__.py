"""
Price Preview Package

Staged price-adjustment engine for the marketplace seller console.
Resolves a product's sale price using Base → Promotions → Discount → Taxes pipeline
with an auditable ledger of every step.
"""

__version__ = "1.0.0"
