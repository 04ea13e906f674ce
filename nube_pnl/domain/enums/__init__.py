"""Domain enums."""

from .order_status import OrderStatus, PaymentStatus, SaleStatus

__all__ = ["OrderStatus", "PaymentStatus", "SaleStatus"]
