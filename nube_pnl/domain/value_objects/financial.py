"""
Financial value objects for Tienda Nube order reconciliation.

CRITICAL: This file must contain ZERO imports from:
- pydantic
- infrastructure adapters
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class CostSource(str, Enum):
    """
    Which step of a fallback chain produced a cost figure.

    Stored on every Sale so a reconciled number can be traced back
    to the payload field (or default) it came from.
    """
    DIRECT_FIELD = "direct_field"          # canonical order field
    EXTRA_FIELD = "extra_field"            # deep search of the extra bag
    PAYMENT_RECORDS = "payment_records"    # itemized payment records
    PERCENTAGE = "percentage"              # % of gross revenue
    EXTERNAL = "external"                  # caller-supplied value
    PRODUCT_LINES = "product_lines"        # sum over product lines
    DEFAULT = "default"                    # nothing found, zero


@dataclass(frozen=True)
class ResolvedAmount:
    """
    Amount resolved by a fee extractor, tagged with its source.

    Attributes:
        amount: Resolved amount (always a finite Decimal)
        source: Fallback step that produced it
        detail: Field name or rule that matched (for audit logs)
    """
    amount: Decimal
    source: CostSource
    detail: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if not self.amount.is_finite():
            raise ValueError(f"Resolved amount must be finite, got: {self.amount}")


@dataclass(frozen=True)
class ShippingLegs:
    """Customer-charged vs. owner-paid shipping for one order."""
    customer: Decimal
    owner: Decimal

    @property
    def delta(self) -> Decimal:
        """Positive when the customer paid more than the shipping cost."""
        return self.customer - self.owner


@dataclass(frozen=True)
class DiscountBreakdown:
    """Order-level discount components."""
    total: Decimal
    coupon: Decimal
    gateway: Decimal


@dataclass(frozen=True)
class PaymentFeeDetail:
    """
    Fee fields of a single payment record, absent values reported as 0.
    """
    payment_id: Optional[int]
    status: str
    gateway: str
    method: str
    gateway_fee: Decimal
    installments_cost: Decimal
    discount_gateway: Decimal
    other_fee: Decimal
    transaction_amount: Decimal
    net_amount: Decimal

    @property
    def explicit_fees(self) -> Decimal:
        return (
            self.gateway_fee
            + self.installments_cost
            + self.discount_gateway
            + self.other_fee
        )


@dataclass(frozen=True)
class FinancialBreakdown:
    """
    Diagnostic decomposition of a single order.

    Read-only view for reconciliation tooling. It exposes the same
    fee resolution as the Sale transformer with finer granularity
    and is never persisted.
    """
    gross_revenue: Decimal
    subtotal: Decimal
    shipping: ShippingLegs
    discounts: DiscountBreakdown
    platform_fee: Decimal
    payment_fee: Decimal
    product_cost: Decimal
    payments: Optional[List[PaymentFeeDetail]] = None

    def get_payment_fee_total(self) -> Decimal:
        """Sum of explicit fee fields across all payment records."""
        if not self.payments:
            return Decimal("0")
        return sum((p.explicit_fees for p in self.payments), Decimal("0"))
