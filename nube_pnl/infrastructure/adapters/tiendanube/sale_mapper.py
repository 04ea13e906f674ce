"""
Tienda Nube order to domain Sale mapper.

CRITICAL: The input must come out of validate_order/safe_parse_order.
Shape is not re-checked here.

The mapping is pure: the same order and configuration always produce
equal Sales (only the generated Sale id differs).
"""
import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from nube_pnl.domain.entities import Sale, SaleProduct
from nube_pnl.domain.enums import OrderStatus, PaymentStatus, SaleStatus
from nube_pnl.domain.value_objects import CostSource
from .coercion import to_decimal, to_decimal_or_zero
from .fee_config import FeeConfiguration
from .fee_mapper import TiendaNubeFeeMapper
from .schemas import TiendaNubeOrder, TiendaNubeProduct

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

_PAID_STATUSES = {PaymentStatus.PAID, PaymentStatus.AUTHORIZED}
_CANCELLED_PAYMENT_STATUSES = {PaymentStatus.VOIDED, PaymentStatus.REFUNDED}


class TiendaNubeSaleMapper:
    """Builds the canonical Sale from a validated Tienda Nube order."""

    @staticmethod
    def to_sale(order: TiendaNubeOrder, config: Optional[FeeConfiguration] = None) -> Sale:
        """
        Transform a validated order into a Sale.

        Args:
            order: Order returned by validate_order/safe_parse_order
            config: Store fee configuration (defaults when omitted)

        Returns:
            Sale with every cost category resolved and net figures derived
        """
        config = config or FeeConfiguration()

        gross_revenue = to_decimal_or_zero(order.total)

        platform_fee = TiendaNubeFeeMapper.extract_platform_fee(
            order, gross_revenue, config.platform_fee_percentage
        )
        payment_fee = TiendaNubeFeeMapper.extract_payment_fee(
            order, gross_revenue, config.gateway_fee_percentage_overrides
        )
        shipping_cost = TiendaNubeFeeMapper.calculate_shipping_cost(
            order, config.real_shipping_cost
        )
        product_cost = TiendaNubeFeeMapper.calculate_product_cost(order.products)

        # Usually a share of a manually entered campaign spend
        advertising_cost = to_decimal(config.advertising_cost)
        advertising_source = CostSource.EXTERNAL
        if advertising_cost is None:
            advertising_cost = ZERO
            advertising_source = CostSource.DEFAULT

        sale = Sale.create(
            order_number=order.number,
            date=order.created_at,
            customer_name=order.customer.name,
            gross_revenue=gross_revenue,
            platform_fee=platform_fee.amount,
            payment_fee=payment_fee.amount,
            shipping_cost=shipping_cost.amount,
            product_cost=product_cost.amount,
            advertising_cost=advertising_cost,
            payment_method=order.gateway_name or order.gateway,
            shipping_method=order.shipping_option,
            currency=order.currency,
            status=TiendaNubeSaleMapper.map_sale_status(order.payment_status, order.status),
            products=[TiendaNubeSaleMapper.map_product(p) for p in order.products],
            cost_sources={
                "platform_fee": platform_fee.source,
                "payment_fee": payment_fee.source,
                "shipping_cost": shipping_cost.source,
                "product_cost": product_cost.source,
                "advertising_cost": advertising_source,
            },
        )

        logger.info(
            f"[SALES] Order #{order.number}: gross={sale.gross_revenue}, "
            f"platform={sale.platform_fee} ({platform_fee.source.value}), "
            f"payment={sale.payment_fee} ({payment_fee.source.value}), "
            f"shipping={sale.shipping_cost} ({shipping_cost.source.value}), "
            f"product={sale.product_cost}, ads={sale.advertising_cost}, "
            f"net={sale.net_revenue}"
        )
        return sale

    @staticmethod
    def to_sales(
        orders: Iterable[TiendaNubeOrder],
        config: Optional[FeeConfiguration] = None,
        advertising_cost_per_order: Optional[Decimal] = None,
    ) -> List[Sale]:
        """Transform several orders, charging each the same advertising cost."""
        config = (config or FeeConfiguration()).for_order(
            advertising_cost=advertising_cost_per_order
        )
        return [TiendaNubeSaleMapper.to_sale(order, config) for order in orders]

    @staticmethod
    def map_sale_status(payment_status: PaymentStatus, order_status: OrderStatus) -> SaleStatus:
        """
        Collapse order status + payment status into a SaleStatus.

        A cancelled order is cancelled whatever its payment says.
        """
        if order_status == OrderStatus.CANCELLED:
            return SaleStatus.CANCELLED
        if payment_status in _PAID_STATUSES:
            return SaleStatus.PAID
        if payment_status in _CANCELLED_PAYMENT_STATUSES:
            return SaleStatus.CANCELLED
        return SaleStatus.PENDING

    @staticmethod
    def map_product(product: TiendaNubeProduct) -> SaleProduct:
        """Normalize a product line (price and cost default to 0)."""
        price = to_decimal_or_zero(product.price)
        cost = to_decimal_or_zero(product.cost)
        product_id = product.product_id if product.product_id is not None else product.id

        return SaleProduct(
            id=str(product_id) if product_id is not None else "",
            name=product.name,
            sku=product.sku or "",
            quantity=product.quantity,
            price=price,
            cost=cost,
            total=price * product.quantity,
        )
