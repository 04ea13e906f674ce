"""Application services."""

from .metrics_service import CostBreakdownTotals, DashboardMetrics, calculate_dashboard_metrics
from .reconciliation_service import (
    BatchReconciliationResult,
    OrderFailure,
    SalesReconciliationService,
)

__all__ = [
    "BatchReconciliationResult",
    "CostBreakdownTotals",
    "DashboardMetrics",
    "OrderFailure",
    "SalesReconciliationService",
    "calculate_dashboard_metrics",
]
