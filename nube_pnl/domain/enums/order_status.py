"""
Order Status Enums.

Status values reported by Tienda Nube and the simplified sale status.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Tienda Nube order status values."""

    OPEN = "open"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Tienda Nube payment status values."""

    PENDING = "pending"
    AUTHORIZED = "authorized"
    PAID = "paid"
    VOIDED = "voided"
    REFUNDED = "refunded"
    ABANDONED = "abandoned"


class SaleStatus(str, Enum):
    """Tri-state status of a Sale (collapses order + payment status)."""

    PAID = "paid"
    PENDING = "pending"
    CANCELLED = "cancelled"
