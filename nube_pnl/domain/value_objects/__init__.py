"""Domain value objects."""

from .financial import (
    CostSource,
    ResolvedAmount,
    ShippingLegs,
    DiscountBreakdown,
    PaymentFeeDetail,
    FinancialBreakdown,
)

__all__ = [
    "CostSource",
    "ResolvedAmount",
    "ShippingLegs",
    "DiscountBreakdown",
    "PaymentFeeDetail",
    "FinancialBreakdown",
]
