"""Domain layer - pure domain models."""

from .entities import Sale, SaleProduct
from .enums import OrderStatus, PaymentStatus, SaleStatus
from .value_objects import CostSource, FinancialBreakdown, ResolvedAmount

__all__ = [
    "CostSource",
    "FinancialBreakdown",
    "OrderStatus",
    "PaymentStatus",
    "ResolvedAmount",
    "Sale",
    "SaleProduct",
    "SaleStatus",
]
