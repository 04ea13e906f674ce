"""
Sales reconciliation service.

Turns a batch of raw Tienda Nube order payloads into Sales.

Flow:
1. Validate every payload (non-throwing form)
2. Allocate the period's advertising spend over the valid orders
3. Transform each valid order with its own advertising share
4. Collect per-order failures, never abort the batch
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional

from nube_pnl.domain.entities import Sale
from nube_pnl.infrastructure.adapters.tiendanube import (
    FeeConfiguration,
    TiendaNubeSaleMapper,
    ValidationIssue,
    allocate_advertising_cost,
    check_transformable,
    safe_parse_order,
    validate_order,
)
from nube_pnl.infrastructure.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class OrderFailure:
    """
    An order that could not be turned into a Sale.

    Attributes:
        order_ref: Order id when known, else position in the batch
        stage: "validation" or "transformation"
        message: Error message
        issues: Field-level issues (validation failures only)
    """
    order_ref: Any
    stage: str
    message: str
    issues: List[ValidationIssue] = field(default_factory=list)


@dataclass
class BatchReconciliationResult:
    """Output of a batch reconciliation."""
    sales: List[Sale] = field(default_factory=list)
    failures: List[OrderFailure] = field(default_factory=list)
    total: int = 0

    @property
    def processed(self) -> int:
        return len(self.sales)

    @property
    def failed(self) -> int:
        return len(self.failures)


# =============================================================================
# SERVICE
# =============================================================================

class SalesReconciliationService:
    """
    Reconciles raw order payloads into Sales for one store.

    Stateless apart from the store's fee configuration; safe to share.
    """

    def __init__(self, config: Optional[FeeConfiguration] = None) -> None:
        """
        Initialize service.

        Args:
            config: Store fee configuration (defaults when omitted)
        """
        self._config = config or FeeConfiguration()

    @property
    def config(self) -> FeeConfiguration:
        return self._config

    def reconcile_order(
        self,
        payload: Any,
        advertising_cost: Optional[Decimal] = None,
        real_shipping_cost: Optional[Decimal] = None,
    ) -> Sale:
        """
        Validate and transform a single order payload.

        Raises:
            OrderValidationError: If the payload is malformed
        """
        order = validate_order(payload)
        config = self._config.for_order(
            advertising_cost=advertising_cost,
            real_shipping_cost=real_shipping_cost,
        )
        return TiendaNubeSaleMapper.to_sale(order, config)

    def reconcile_batch(
        self,
        payloads: Iterable[Any],
        total_ad_spend: Optional[Any] = None,
        real_shipping_costs: Optional[Mapping[int, Any]] = None,
    ) -> BatchReconciliationResult:
        """
        Validate, allocate and transform a batch of payloads.

        Args:
            payloads: Raw order payloads
            total_ad_spend: Aggregate advertising spend for the batch,
                            split by revenue share
            real_shipping_costs: Order id -> shipping cost fetched from
                                 fulfillment data

        Returns:
            BatchReconciliationResult with sales and per-order failures
        """
        payloads = list(payloads)
        result = BatchReconciliationResult(total=len(payloads))
        real_shipping_costs = real_shipping_costs or {}

        logger.info(f"[BATCH] Reconciling {len(payloads)} order(s)")

        # Pass 1: validation
        orders = []
        for position, payload in enumerate(payloads):
            parsed = safe_parse_order(payload)
            if not parsed.success:
                order_ref = parsed.error.order_ref
                result.failures.append(OrderFailure(
                    order_ref=order_ref if order_ref is not None else position,
                    stage="validation",
                    message=str(parsed.error),
                    issues=parsed.issues,
                ))
                continue

            for warning in check_transformable(parsed.data):
                logger.warning(f"[BATCH] Order #{parsed.data.number}: {warning}")
            orders.append(parsed.data)

        # Pass 2: advertising needs the whole batch's revenue
        allocation = {}
        if total_ad_spend is not None:
            allocation = allocate_advertising_cost(orders, total_ad_spend)

        # Pass 3: transformation
        for order in orders:
            try:
                config = self._config.for_order(
                    advertising_cost=allocation.get(order.id),
                    real_shipping_cost=real_shipping_costs.get(order.id),
                )
                result.sales.append(TiendaNubeSaleMapper.to_sale(order, config))
            except Exception as e:
                logger.error(f"[BATCH] Failed to transform order {order.id}: {e}")
                result.failures.append(OrderFailure(
                    order_ref=order.id,
                    stage="transformation",
                    message=str(e),
                ))

        logger.info(
            f"[BATCH] Done: {result.processed} processed, {result.failed} failed "
            f"of {result.total}"
        )
        return result
