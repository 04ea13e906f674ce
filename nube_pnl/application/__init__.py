"""Application layer - services and DTOs."""

from .dtos import SaleDTO, SaleProductDTO
from .services import (
    BatchReconciliationResult,
    CostBreakdownTotals,
    DashboardMetrics,
    OrderFailure,
    SalesReconciliationService,
    calculate_dashboard_metrics,
)

__all__ = [
    # DTOs
    "SaleDTO",
    "SaleProductDTO",
    # Services
    "BatchReconciliationResult",
    "CostBreakdownTotals",
    "DashboardMetrics",
    "OrderFailure",
    "SalesReconciliationService",
    "calculate_dashboard_metrics",
]
