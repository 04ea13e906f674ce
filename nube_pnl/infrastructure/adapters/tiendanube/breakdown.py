"""
Financial breakdown of a single Tienda Nube order.

Diagnostic view for reconciliation tooling: same fee resolution as the
Sale mapper, plus subtotal, discount components, both shipping legs and
per-payment fee detail. Read-only, never persisted.
"""
from typing import Optional

from nube_pnl.domain.value_objects import (
    DiscountBreakdown,
    FinancialBreakdown,
    PaymentFeeDetail,
    ShippingLegs,
)
from .coercion import to_decimal, to_decimal_or_zero
from .fee_config import FeeConfiguration
from .fee_mapper import TiendaNubeFeeMapper
from .schemas import TiendaNubeOrder, TiendaNubePayment


def _payment_detail(payment: TiendaNubePayment) -> PaymentFeeDetail:
    return PaymentFeeDetail(
        payment_id=payment.id,
        status=payment.status.value,
        gateway=payment.gateway or "",
        method=payment.payment_method or "",
        gateway_fee=to_decimal_or_zero(payment.gateway_fee),
        installments_cost=to_decimal_or_zero(payment.installments_cost),
        discount_gateway=to_decimal_or_zero(payment.discount_gateway),
        other_fee=to_decimal_or_zero(payment.fee),
        transaction_amount=to_decimal_or_zero(payment.transaction_amount),
        net_amount=to_decimal_or_zero(payment.net_amount),
    )


def get_order_financial_breakdown(
    order: TiendaNubeOrder,
    config: Optional[FeeConfiguration] = None,
) -> FinancialBreakdown:
    """
    Build the diagnostic breakdown of ``order``.

    Owner shipping falls back to the customer-charged amount when the
    store cost is not reported, so the delta is zero rather than the
    full customer charge.

    Args:
        order: Validated order
        config: Store fee configuration (defaults when omitted)

    Returns:
        FinancialBreakdown (``payments`` is None when the order has no
        payment records)
    """
    config = config or FeeConfiguration()

    gross_revenue = to_decimal_or_zero(order.total)

    shipping_customer = to_decimal_or_zero(order.shipping_cost_customer)
    shipping_owner = to_decimal(order.shipping_cost_owner)
    if shipping_owner is None:
        shipping_owner = shipping_customer

    platform_fee = TiendaNubeFeeMapper.extract_platform_fee(
        order, gross_revenue, config.platform_fee_percentage
    )
    payment_fee = TiendaNubeFeeMapper.extract_payment_fee(
        order, gross_revenue, config.gateway_fee_percentage_overrides
    )
    product_cost = TiendaNubeFeeMapper.calculate_product_cost(order.products)

    payments = None
    if order.payments is not None:
        payments = [_payment_detail(payment) for payment in order.payments]

    return FinancialBreakdown(
        gross_revenue=gross_revenue,
        subtotal=to_decimal_or_zero(order.subtotal),
        shipping=ShippingLegs(customer=shipping_customer, owner=shipping_owner),
        discounts=DiscountBreakdown(
            total=to_decimal_or_zero(order.discount),
            coupon=to_decimal_or_zero(order.discount_coupon),
            gateway=to_decimal_or_zero(order.discount_gateway),
        ),
        platform_fee=platform_fee.amount,
        payment_fee=payment_fee.amount,
        product_cost=product_cost.amount,
        payments=payments,
    )
