"""Aggregate profit and loss metrics over a set of Sales."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from nube_pnl.domain.entities import Sale, calculate_net_margin

ZERO = Decimal("0")


@dataclass(frozen=True)
class CostBreakdownTotals:
    """Per-category cost totals."""
    platform_fees: Decimal
    payment_fees: Decimal
    shipping_costs: Decimal
    product_costs: Decimal
    advertising_costs: Decimal

    @property
    def total(self) -> Decimal:
        return (
            self.platform_fees
            + self.payment_fees
            + self.shipping_costs
            + self.product_costs
            + self.advertising_costs
        )


@dataclass(frozen=True)
class DashboardMetrics:
    """Period totals shown on the profit dashboard."""
    total_revenue: Decimal
    total_costs: Decimal
    net_profit: Decimal
    profit_margin: Decimal
    cost_breakdown: CostBreakdownTotals
    total_orders: int
    average_order_value: Decimal
    average_profit: Decimal


def _sum(sales: Sequence[Sale], attribute: str) -> Decimal:
    return sum((getattr(sale, attribute) for sale in sales), ZERO)


def calculate_dashboard_metrics(sales: Sequence[Sale]) -> DashboardMetrics:
    """
    Totals, cost breakdown and averages for ``sales``.

    Margin and averages are 0 for an empty list.
    """
    total_revenue = _sum(sales, "gross_revenue")

    cost_breakdown = CostBreakdownTotals(
        platform_fees=_sum(sales, "platform_fee"),
        payment_fees=_sum(sales, "payment_fee"),
        shipping_costs=_sum(sales, "shipping_cost"),
        product_costs=_sum(sales, "product_cost"),
        advertising_costs=_sum(sales, "advertising_cost"),
    )
    total_costs = cost_breakdown.total
    net_profit = total_revenue - total_costs
    count = len(sales)

    return DashboardMetrics(
        total_revenue=total_revenue,
        total_costs=total_costs,
        net_profit=net_profit,
        profit_margin=calculate_net_margin(total_revenue, net_profit),
        cost_breakdown=cost_breakdown,
        total_orders=count,
        average_order_value=total_revenue / count if count else ZERO,
        average_profit=net_profit / count if count else ZERO,
    )
