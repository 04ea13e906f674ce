"""
Tienda Nube order payload schemas.

Only the fields load-bearing for financial computation are declared.
Everything else is tolerated and preserved (``extra="allow"``) so the
fee extractors can still inspect it.

Each field is one of:
- required (validation fails when missing or of the wrong type),
- optional (``None`` when missing),
- defaulted (normalized to a definite value when missing).

Normalization is total: a payload that passes validation always comes
out with a known status, payment status, currency and gateway name.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator, model_validator

from nube_pnl.domain.enums import OrderStatus, PaymentStatus
from .fee_config import DEFAULT_CURRENCY

logger = logging.getLogger(__name__)

# Amount as reported by the API: string, number or {"amount": ...} object
RawAmount = Optional[Union[str, int, float, Dict[str, Any]]]


def _normalize_enum(value: Any, enum_cls: Type[Enum], default: Enum, field_name: str) -> Enum:
    """Map a raw status string onto ``enum_cls``, falling back to ``default``."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        candidate = value.strip().lower()
        for member in enum_cls:
            if member.value == candidate:
                return member
    if value is not None:
        logger.warning(
            f"[VALIDATION] Unrecognized {field_name} {value!r}, "
            f"defaulting to {default.value!r}"
        )
    return default


class TiendaNubeCustomer(BaseModel):
    """Customer block of an order."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: Optional[int] = None
    name: str
    email: Optional[str] = None


class TiendaNubeProduct(BaseModel):
    """Product line of an order."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: Optional[int] = None
    product_id: Optional[int] = None
    variant_id: Optional[int] = None
    name: str = ""
    sku: Optional[str] = None
    quantity: int
    price: RawAmount = None
    cost: RawAmount = None

    @field_validator("name", mode="before")
    @classmethod
    def _none_name(cls, value: Any) -> Any:
        return "" if value is None else value


class TiendaNubePayment(BaseModel):
    """
    Single settlement attempt tied to an order.

    Fee fields vary by gateway; any subset may be present.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    # Gateways issue numeric or opaque string ids
    id: Optional[Union[int, str]] = None
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[str] = None
    payment_type: Optional[str] = None
    gateway: Optional[str] = None
    installments: Optional[int] = None

    gateway_fee: RawAmount = None
    installments_cost: RawAmount = None
    discount_gateway: RawAmount = None
    fee: RawAmount = None
    transaction_amount: RawAmount = None
    net_amount: RawAmount = None
    total: RawAmount = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> PaymentStatus:
        return _normalize_enum(value, PaymentStatus, PaymentStatus.PENDING, "payment record status")


class TiendaNubeOrder(BaseModel):
    """
    Validated and normalized Tienda Nube order.

    Required: ``id``, ``number``, ``customer``, ``products``.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    # Identifiers
    id: StrictInt
    number: StrictInt
    token: str = ""
    store_id: str = ""
    created_at: str = ""
    updated_at: str = ""

    # Status
    status: OrderStatus = OrderStatus.OPEN
    payment_status: PaymentStatus = PaymentStatus.PENDING

    # Financial
    currency: str = DEFAULT_CURRENCY
    total: RawAmount = "0"
    subtotal: RawAmount = "0"
    total_usd: RawAmount = "0"
    discount: RawAmount = "0"
    discount_coupon: RawAmount = None
    discount_gateway: RawAmount = None

    # Shipping
    shipping: RawAmount = "0"
    shipping_option: str = ""
    shipping_cost_customer: RawAmount = None
    shipping_cost_owner: RawAmount = None
    shipping_cost_store: RawAmount = None

    # Payment
    gateway: str = ""
    gateway_name: str = ""

    customer: TiendaNubeCustomer
    products: List[TiendaNubeProduct]
    payments: Optional[List[TiendaNubePayment]] = None
    extra: Optional[Dict[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        """Fill defaulted fields that depend on other fields."""
        if not isinstance(data, dict):
            return data

        data = dict(data)

        for key in ("total", "discount"):
            if data.get(key) is None:
                data[key] = "0"
        # Unreported shipping keeps its "0" default but stays out of
        # model_fields_set, so cost resolution can tell it was never sent
        if data.get("shipping") is None:
            data.pop("shipping", None)
        for key in ("subtotal", "total_usd"):
            if data.get(key) is None:
                data[key] = data["total"]

        for key in ("token", "gateway", "shipping_option", "created_at", "updated_at"):
            if data.get(key) is None:
                data[key] = ""
        if data.get("gateway_name") is None:
            data["gateway_name"] = data["gateway"]
        if data.get("currency") is None:
            data["currency"] = DEFAULT_CURRENCY

        store_id = data.get("store_id")
        if store_id is None:
            data["store_id"] = ""
        elif isinstance(store_id, int) and not isinstance(store_id, bool):
            data["store_id"] = str(store_id)

        return data

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> OrderStatus:
        return _normalize_enum(value, OrderStatus, OrderStatus.OPEN, "order status")

    @field_validator("payment_status", mode="before")
    @classmethod
    def _normalize_payment_status(cls, value: Any) -> PaymentStatus:
        return _normalize_enum(value, PaymentStatus, PaymentStatus.PENDING, "payment status")

    def raw_value(self, key: str) -> Any:
        """Raw value of a declared or extra field (None when absent)."""
        if key in type(self).model_fields:
            return getattr(self, key)
        return (self.model_extra or {}).get(key)
