"""Tienda Nube order-to-sale reconciliation core."""

__version__ = "0.1.0"
