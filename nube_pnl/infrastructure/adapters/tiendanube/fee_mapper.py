"""
Tienda Nube fee extraction.

Tienda Nube reports the same economic fact (platform commission,
gateway fee, shipping cost) through several optional fields whose
presence depends on store configuration and payment gateway. Each
extractor walks an ordered fallback chain and always produces one
definite number, tagged with the step that produced it.

CRITICAL: Fallback order is part of the contract. Changing it changes
reported margins for every historical order on recomputation.
"""
import logging
import re
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Tuple

from nube_pnl.domain.value_objects import CostSource, ResolvedAmount
from .coercion import find_numeric_by_pattern, to_decimal
from .fee_config import (
    DEFAULT_PAYMENT_GATEWAY_FEES,
    PLATFORM_FEE_EXTRA_PATTERN,
    PLATFORM_FEE_KEYS,
    UNKNOWN_GATEWAY_FEE_PERCENTAGE,
)
from .schemas import TiendaNubeOrder, TiendaNubePayment, TiendaNubeProduct

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Explicit fee fields of a payment record; every present one is summed
PAYMENT_FEE_FIELDS = ("gateway_fee", "installments_cost", "discount_gateway", "fee")

# Shipping candidates by priority; only the first present one is used
SHIPPING_COST_FIELDS = ("shipping_cost_owner", "shipping_cost_store", "shipping")

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def percentage_of(amount: Decimal, percentage: Decimal) -> Decimal:
    """``amount * percentage / 100``."""
    return amount * percentage / HUNDRED


class TiendaNubeFeeMapper:
    """
    Resolves each cost category of a Tienda Nube order.

    All methods are pure: they read the validated order and the
    supplied configuration values, nothing else.
    """

    # ==========================================================================
    # PLATFORM FEE
    # ==========================================================================

    @staticmethod
    def extract_platform_fee(
        order: TiendaNubeOrder,
        gross_revenue: Decimal,
        fee_percentage: Decimal,
    ) -> ResolvedAmount:
        """
        Resolve the Tienda Nube commission.

        Chain:
        1. Canonical order keys (``PLATFORM_FEE_KEYS`` order)
        2. Commission-like key anywhere in the ``extra`` bag
        3. ``gross_revenue * fee_percentage / 100``

        The percentage fallback is computed on gross revenue, not on
        subtotal.

        Args:
            order: Validated order
            gross_revenue: Order total
            fee_percentage: Platform fee percentage (0-100)

        Returns:
            ResolvedAmount with the commission
        """
        for key in PLATFORM_FEE_KEYS:
            value = to_decimal(order.raw_value(key))
            if value is not None:
                logger.debug(f"[FEES] Order {order.id}: platform fee from '{key}' = {value}")
                return ResolvedAmount(value, CostSource.DIRECT_FIELD, key)

        extra_commission = find_numeric_by_pattern(order.extra, PLATFORM_FEE_EXTRA_PATTERN)
        if extra_commission is not None:
            logger.debug(f"[FEES] Order {order.id}: platform fee from extra = {extra_commission}")
            return ResolvedAmount(extra_commission, CostSource.EXTRA_FIELD, "extra")

        fee = percentage_of(gross_revenue, fee_percentage)
        logger.debug(
            f"[FEES] Order {order.id}: platform fee {fee_percentage}% of {gross_revenue} = {fee}"
        )
        return ResolvedAmount(fee, CostSource.PERCENTAGE, f"{fee_percentage}%")

    # ==========================================================================
    # PAYMENT GATEWAY FEE
    # ==========================================================================

    @staticmethod
    def payment_record_fee(payment: TiendaNubePayment) -> Tuple[Decimal, bool]:
        """
        Fee reported by a single payment record.

        Every present explicit fee field is summed. Only when none is
        present, a transaction amount larger than the net amount is
        taken as an implicit fee.

        Returns:
            (fee, has_data) where has_data tells whether the record
            carried any usable fee signal
        """
        total = ZERO
        has_data = False

        for name in PAYMENT_FEE_FIELDS:
            value = to_decimal(getattr(payment, name))
            if value is not None:
                total += value
                has_data = True

        if not has_data:
            transaction_amount = to_decimal(payment.transaction_amount)
            net_amount = to_decimal(payment.net_amount)
            if (
                transaction_amount is not None
                and net_amount is not None
                and transaction_amount > net_amount
            ):
                total += transaction_amount - net_amount
                has_data = True

        return total, has_data

    @staticmethod
    def sum_payment_gateway_fees(
        payments: Optional[Iterable[TiendaNubePayment]],
    ) -> Optional[Decimal]:
        """
        Sum gateway fees over all payment records.

        Records are summed independently, so an authorization and a
        capture record for the same payment both count.

        Args:
            payments: Payment records of the order (may be None)

        Returns:
            Total fee, or None when no record carried usable fee data
        """
        if not payments:
            return None

        total = ZERO
        has_detailed_data = False

        for payment in payments:
            fee, has_data = TiendaNubeFeeMapper.payment_record_fee(payment)
            total += fee
            has_detailed_data = has_detailed_data or has_data

        if has_detailed_data or total > 0:
            return total
        return None

    @staticmethod
    def normalize_gateway_name(gateway: str) -> str:
        """Lower-case and strip non-alphanumerics ("Pago-Nube" -> "pagonube")."""
        return _NON_ALNUM.sub("", (gateway or "").lower())

    @staticmethod
    def gateway_fee_percentage(
        gateway: str,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> Decimal:
        """
        Fee percentage for a payment gateway.

        Lookup order:
        1. ``overrides`` by exact key
        2. ``overrides`` by normalized key
        3. DEFAULT_PAYMENT_GATEWAY_FEES by normalized substring match
        4. UNKNOWN_GATEWAY_FEE_PERCENTAGE

        Args:
            gateway: Gateway name as reported by the order
            overrides: Store-specific gateway -> percentage map

        Returns:
            Percentage (0-100)
        """
        normalize = TiendaNubeFeeMapper.normalize_gateway_name
        normalized = normalize(gateway)

        if overrides:
            if gateway in overrides:
                value = to_decimal(overrides[gateway])
                if value is not None:
                    return value
            for key, percentage in overrides.items():
                value = to_decimal(percentage)
                if value is not None and normalize(key) == normalized:
                    return value

        if normalized:
            for key, percentage in DEFAULT_PAYMENT_GATEWAY_FEES.items():
                if normalize(key) in normalized:
                    return percentage

        logger.warning(
            f"[FEES] Unknown payment gateway: {gateway!r}, "
            f"using default {UNKNOWN_GATEWAY_FEE_PERCENTAGE}%"
        )
        return UNKNOWN_GATEWAY_FEE_PERCENTAGE

    @staticmethod
    def extract_payment_fee(
        order: TiendaNubeOrder,
        gross_revenue: Decimal,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> ResolvedAmount:
        """
        Resolve the payment gateway fee.

        Chain:
        1. Fees itemized on the order's payment records
        2. ``gross_revenue * gateway_fee_percentage(order.gateway) / 100``
        """
        from_records = TiendaNubeFeeMapper.sum_payment_gateway_fees(order.payments)
        if from_records is not None:
            logger.debug(f"[FEES] Order {order.id}: payment fee from payment records = {from_records}")
            return ResolvedAmount(from_records, CostSource.PAYMENT_RECORDS, "payments")

        percentage = TiendaNubeFeeMapper.gateway_fee_percentage(order.gateway, overrides)
        fee = percentage_of(gross_revenue, percentage)
        logger.debug(
            f"[FEES] Order {order.id}: payment fee {percentage}% "
            f"({order.gateway or 'no gateway'}) of {gross_revenue} = {fee}"
        )
        return ResolvedAmount(fee, CostSource.PERCENTAGE, f"{percentage}%")

    # ==========================================================================
    # SHIPPING COST
    # ==========================================================================

    @staticmethod
    def calculate_shipping_cost(
        order: TiendaNubeOrder,
        real_shipping_cost: Optional[Any] = None,
    ) -> ResolvedAmount:
        """
        Resolve what the store paid for shipping.

        Chain (first hit wins, never summed):
        1. ``real_shipping_cost`` fetched by the caller from fulfillment data
        2. ``shipping_cost_owner``
        3. ``shipping_cost_store``
        4. ``shipping``, only when the payload reported it
        5. 0
        """
        real_cost = to_decimal(real_shipping_cost)
        if real_cost is not None:
            return ResolvedAmount(real_cost, CostSource.EXTERNAL, "real_shipping_cost")

        for name in SHIPPING_COST_FIELDS:
            if name not in order.model_fields_set:
                continue
            value = to_decimal(getattr(order, name))
            if value is not None:
                return ResolvedAmount(value, CostSource.DIRECT_FIELD, name)

        return ResolvedAmount(ZERO, CostSource.DEFAULT)

    # ==========================================================================
    # PRODUCT COST
    # ==========================================================================

    @staticmethod
    def calculate_product_cost(products: Iterable[TiendaNubeProduct]) -> ResolvedAmount:
        """
        Sum of unit cost * quantity over all product lines.

        Missing cost counts as zero. This understates cost for stores
        that do not load product costs; no estimate is made.
        """
        total = ZERO
        for product in products:
            cost = to_decimal(product.cost)
            if cost is not None:
                total += cost * product.quantity
        return ResolvedAmount(total, CostSource.PRODUCT_LINES)
