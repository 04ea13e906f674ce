"""Domain entities."""

from .sale import (
    COST_CATEGORIES,
    Sale,
    SaleProduct,
    calculate_net_margin,
    calculate_net_revenue,
)

__all__ = [
    "COST_CATEGORIES",
    "Sale",
    "SaleProduct",
    "calculate_net_margin",
    "calculate_net_revenue",
]
