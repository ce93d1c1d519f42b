"""Shopify → WebStock order relay."""

__version__ = "1.0.0"
