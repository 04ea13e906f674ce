"""Tienda Nube infrastructure adapter."""

from .ad_allocator import allocate_advertising_cost
from .breakdown import get_order_financial_breakdown
from .coercion import find_numeric_by_pattern, to_decimal
from .fee_config import FeeConfiguration
from .fee_mapper import TiendaNubeFeeMapper
from .sale_mapper import TiendaNubeSaleMapper
from .schemas import TiendaNubeOrder, TiendaNubePayment, TiendaNubeProduct
from .validator import (
    OrderParseResult,
    OrderValidationError,
    ValidationIssue,
    check_transformable,
    safe_parse_order,
    validate_order,
)

__all__ = [
    "FeeConfiguration",
    "OrderParseResult",
    "OrderValidationError",
    "TiendaNubeFeeMapper",
    "TiendaNubeOrder",
    "TiendaNubePayment",
    "TiendaNubeProduct",
    "TiendaNubeSaleMapper",
    "ValidationIssue",
    "allocate_advertising_cost",
    "check_transformable",
    "find_numeric_by_pattern",
    "get_order_financial_breakdown",
    "safe_parse_order",
    "to_decimal",
    "validate_order",
]
