"""
Sale aggregate.

CRITICAL: This file must contain ZERO imports from:
- pydantic
- infrastructure adapters

A Sale is created once per validated order and never mutated.
Re-computation produces a new Sale; reconciling it against a stored
one is the job of the persistence layer.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple
from uuid import uuid4

from ..enums import SaleStatus
from ..value_objects import CostSource

ZERO = Decimal("0")
HUNDRED = Decimal("100")

COST_CATEGORIES = (
    "platform_fee",
    "payment_fee",
    "shipping_cost",
    "product_cost",
    "advertising_cost",
)


def calculate_net_revenue(gross_revenue: Decimal, costs: Iterable[Decimal]) -> Decimal:
    """Gross revenue minus every cost category."""
    return gross_revenue - sum(costs, ZERO)


def calculate_net_margin(gross_revenue: Decimal, net_revenue: Decimal) -> Decimal:
    """
    Net revenue as a percentage of gross revenue.

    Returns 0 when there is no revenue to divide by.
    """
    if gross_revenue == 0:
        return ZERO
    return net_revenue / gross_revenue * HUNDRED


@dataclass(frozen=True)
class SaleProduct:
    """Normalized product line of a sale."""
    id: str
    name: str
    sku: str
    quantity: int
    price: Decimal
    cost: Decimal
    total: Decimal

    def __post_init__(self):
        expected = self.price * self.quantity
        if self.total != expected:
            raise ValueError(f"Line total mismatch: {self.total} vs {expected}")


@dataclass(frozen=True)
class Sale:
    """
    Canonical sale record with reconciled profit and loss.

    The generated ``id`` is excluded from equality: two Sales computed
    from the same order and configuration compare equal.
    """
    order_number: int
    date: str
    customer_name: str

    # Revenue
    gross_revenue: Decimal

    # Costs
    platform_fee: Decimal
    payment_fee: Decimal
    shipping_cost: Decimal
    product_cost: Decimal
    advertising_cost: Decimal

    # Derived
    net_revenue: Decimal
    net_margin: Decimal

    # Details
    payment_method: str
    shipping_method: str
    currency: str
    status: SaleStatus
    products: Tuple[SaleProduct, ...] = ()

    # Audit: cost category -> fallback step that produced it (read-only)
    cost_sources: Mapping[str, CostSource] = field(default_factory=dict, hash=False)

    id: str = field(default_factory=lambda: str(uuid4()), compare=False)

    def __post_init__(self):
        # Read-only copy of the caller's mapping
        object.__setattr__(self, 'cost_sources', MappingProxyType(dict(self.cost_sources)))

    @classmethod
    def create(
        cls,
        *,
        order_number: int,
        date: str,
        customer_name: str,
        gross_revenue: Decimal,
        platform_fee: Decimal,
        payment_fee: Decimal,
        shipping_cost: Decimal,
        product_cost: Decimal,
        advertising_cost: Decimal,
        payment_method: str,
        shipping_method: str,
        currency: str,
        status: SaleStatus,
        products: Iterable[SaleProduct] = (),
        cost_sources: Optional[Dict[str, CostSource]] = None,
    ) -> "Sale":
        """Build a Sale, deriving net revenue and net margin."""
        net_revenue = calculate_net_revenue(
            gross_revenue,
            (platform_fee, payment_fee, shipping_cost, product_cost, advertising_cost),
        )
        return cls(
            order_number=order_number,
            date=date,
            customer_name=customer_name,
            gross_revenue=gross_revenue,
            platform_fee=platform_fee,
            payment_fee=payment_fee,
            shipping_cost=shipping_cost,
            product_cost=product_cost,
            advertising_cost=advertising_cost,
            net_revenue=net_revenue,
            net_margin=calculate_net_margin(gross_revenue, net_revenue),
            payment_method=payment_method,
            shipping_method=shipping_method,
            currency=currency,
            status=status,
            products=tuple(products),
            cost_sources=cost_sources or {},
        )

    @property
    def total_costs(self) -> Decimal:
        return sum((getattr(self, name) for name in COST_CATEGORIES), ZERO)
