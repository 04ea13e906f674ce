"""
Advertising spend allocation.

Campaign spend is entered as one aggregate figure per period and has
to be charged to individual orders. Each order carries a share
proportional to its revenue.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, Sequence

from .coercion import to_decimal, to_decimal_or_zero
from .schemas import TiendaNubeOrder

logger = logging.getLogger(__name__)


def allocate_advertising_cost(
    orders: Sequence[TiendaNubeOrder],
    total_ad_spend: Any,
) -> Dict[int, Decimal]:
    """
    Distribute ``total_ad_spend`` across orders by revenue share.

    Needs the whole batch: revenue is summed first, shares are computed
    in a second pass.

    Args:
        orders: Validated orders of the period
        total_ad_spend: Aggregate advertising spend

    Returns:
        Order id -> advertising cost. Empty when there are no orders,
        no spend, or no revenue to divide by.
    """
    spend = to_decimal(total_ad_spend)
    if not orders or spend is None or spend == 0:
        return {}

    revenues = [(order.id, to_decimal_or_zero(order.total)) for order in orders]
    total_revenue = sum((revenue for _, revenue in revenues), Decimal("0"))

    if total_revenue == 0:
        logger.warning(
            f"[ADS] Total revenue is zero across {len(orders)} order(s), "
            f"advertising spend {spend} not allocated"
        )
        return {}

    allocation: Dict[int, Decimal] = {}
    for order_id, revenue in revenues:
        allocation[order_id] = spend * (revenue / total_revenue)

    logger.info(f"[ADS] Allocated {spend} across {len(allocation)} order(s)")
    return allocation
