"""
Tienda Nube order validation.

Two entry points:
- ``validate_order``: raises OrderValidationError on malformed input.
- ``safe_parse_order``: never raises, returns an OrderParseResult.

Batch callers must use ``safe_parse_order`` so one malformed order
does not abort the batch.
"""
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import ValidationError

from .coercion import to_decimal
from .schemas import TiendaNubeOrder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    """One field-level validation problem."""
    location: str       # dotted path, e.g. "products.0.quantity"
    message: str
    kind: str           # pydantic error type, e.g. "missing", "int_type"

    def __str__(self) -> str:
        return f"{self.location or '<root>'}: {self.message}"


class OrderValidationError(ValueError):
    """Raised when an order payload does not have the required shape."""

    def __init__(self, issues: List[ValidationIssue], order_ref: Optional[Any] = None):
        self.issues = issues
        self.order_ref = order_ref
        details = "; ".join(str(issue) for issue in issues)
        prefix = f"Invalid order {order_ref}" if order_ref is not None else "Invalid order"
        super().__init__(f"{prefix}: {details}")

    @classmethod
    def from_pydantic(cls, exc: ValidationError, data: Any = None) -> "OrderValidationError":
        issues = [
            ValidationIssue(
                location=".".join(str(part) for part in error["loc"]),
                message=error["msg"],
                kind=error["type"],
            )
            for error in exc.errors()
        ]
        order_ref = data.get("id") if isinstance(data, dict) else None
        return cls(issues, order_ref=order_ref)


@dataclass(frozen=True)
class OrderParseResult:
    """Outcome of ``safe_parse_order``: either ``data`` or ``error`` is set."""
    success: bool
    data: Optional[TiendaNubeOrder] = None
    error: Optional[OrderValidationError] = None

    @property
    def issues(self) -> List[ValidationIssue]:
        return self.error.issues if self.error else []


def validate_order(data: Any) -> TiendaNubeOrder:
    """
    Validate and normalize a raw order payload.

    Args:
        data: Untrusted order payload (usually a dict decoded from JSON)

    Returns:
        Normalized TiendaNubeOrder

    Raises:
        OrderValidationError: If required fields are missing or mistyped
    """
    if isinstance(data, TiendaNubeOrder):
        return data
    try:
        return TiendaNubeOrder.model_validate(data)
    except ValidationError as e:
        raise OrderValidationError.from_pydantic(e, data) from e


def safe_parse_order(data: Any) -> OrderParseResult:
    """
    Validate a raw order payload without raising.

    Args:
        data: Untrusted order payload

    Returns:
        OrderParseResult with the normalized order or the validation error
    """
    try:
        order = validate_order(data)
    except OrderValidationError as e:
        logger.warning(f"[VALIDATION] {e}")
        return OrderParseResult(success=False, error=e)
    return OrderParseResult(success=True, data=order)


def check_transformable(order: TiendaNubeOrder) -> List[str]:
    """
    Data-quality warnings for a validated order.

    These never block transformation (missing financial data falls back
    to defaults) but are worth surfacing to whoever runs the sync.

    Returns:
        Human-readable warnings, empty when the order looks complete
    """
    warnings: List[str] = []

    if to_decimal(order.total) is None:
        warnings.append("Order total is missing or invalid")

    if not order.customer.name:
        warnings.append("Customer name is missing")

    if not order.products:
        warnings.append("Order has no products")

    for index, product in enumerate(order.products, start=1):
        if to_decimal(product.price) is None:
            warnings.append(f"Product {index} has invalid price")
        if product.quantity <= 0:
            warnings.append(f"Product {index} has invalid quantity")

    return warnings
