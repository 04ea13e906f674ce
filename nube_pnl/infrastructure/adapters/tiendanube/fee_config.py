"""
Fee defaults and per-store fee configuration for Tienda Nube.

These values come from observed settlements of Argentine stores and
can be overridden per store through FeeConfiguration.

All percentages are fractions of gross revenue expressed 0-100.
"""
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==============================================================================
# PAYMENT GATEWAY FEES (percent of gross revenue)
# ==============================================================================

# Matched by normalized substring, in this order.
# Pago Nube includes installment costs (cuotas sin interes), which run
# 10-15% depending on the number of installments.
DEFAULT_PAYMENT_GATEWAY_FEES = {
    "mercadopago": Decimal("4.99"),
    "mercadopago_transparent": Decimal("4.99"),
    "mobbex": Decimal("3.99"),
    "payway": Decimal("3.5"),
    "todo_pago": Decimal("4.5"),
    "payu": Decimal("3.99"),
    "decidir": Decimal("3.5"),
    "pago-nube": Decimal("11.18"),
    "transferencia": Decimal("0"),
    "efectivo": Decimal("0"),
    "bank_transfer": Decimal("0"),
    "cash": Decimal("0"),
    "manual": Decimal("0"),
}

# Used when a gateway matches nothing above
UNKNOWN_GATEWAY_FEE_PERCENTAGE = Decimal("3.5")


# ==============================================================================
# PLATFORM COMMISSION
# ==============================================================================

DEFAULT_PLATFORM_FEE_PERCENTAGE = Decimal("5.31")

# Canonical order keys carrying the platform commission, by priority
PLATFORM_FEE_KEYS = (
    "platform_fee",
    "store_commission",
    "tiendanube_commission",
    "tiendanube_fee",
)

# Spanish / Portuguese / English commission keys inside the extra bag
PLATFORM_FEE_EXTRA_PATTERN = r"(commission|comision|comiss|tienda)"


# ==============================================================================
# ORDER DEFAULTS
# ==============================================================================

DEFAULT_CURRENCY = "ARS"


# ==============================================================================
# STORE FEE CONFIGURATION
# ==============================================================================

class FeeConfiguration(BaseModel):
    """
    User-supplied fee settings for one store.

    Percentages are fractions of gross revenue expressed 0-100.
    ``advertising_cost`` and ``real_shipping_cost`` apply to a single
    order and are set per order by batch callers.
    """

    model_config = ConfigDict(frozen=True)

    platform_fee_percentage: Decimal = Field(
        default=DEFAULT_PLATFORM_FEE_PERCENTAGE,
        ge=0,
        le=100,
        description="Tienda Nube commission (% of gross revenue)",
    )
    gateway_fee_percentage_overrides: Dict[str, Decimal] = Field(
        default_factory=dict,
        description="Gateway name -> fee percentage, overrides the defaults",
    )
    advertising_cost: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Advertising cost attributed to the order",
    )
    real_shipping_cost: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Shipping cost from the fulfillment orders API",
    )

    @field_validator(
        "platform_fee_percentage",
        "advertising_cost",
        "real_shipping_cost",
        mode="before",
    )
    @classmethod
    def _float_to_decimal(cls, value: Any) -> Any:
        # str() first so 4.99 stays 4.99 instead of its binary expansion
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    @field_validator("gateway_fee_percentage_overrides", mode="before")
    @classmethod
    def _overrides_to_decimal(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: Decimal(str(pct)) if isinstance(pct, float) else pct
                for key, pct in value.items()
            }
        return value

    @field_validator("gateway_fee_percentage_overrides")
    @classmethod
    def _check_override_range(cls, value: Dict[str, Decimal]) -> Dict[str, Decimal]:
        for gateway, pct in value.items():
            if not Decimal("0") <= pct <= Decimal("100"):
                raise ValueError(
                    f"Gateway fee percentage for {gateway!r} must be 0-100, got {pct}"
                )
        return value

    @classmethod
    def from_settings(cls, settings: Any) -> "FeeConfiguration":
        """Build the store defaults from FeeSettings."""
        return cls(
            platform_fee_percentage=settings.platform_fee_percentage,
            gateway_fee_percentage_overrides=settings.gateway_fee_overrides,
            advertising_cost=settings.default_advertising_cost,
        )

    def for_order(
        self,
        advertising_cost: Optional[Decimal] = None,
        real_shipping_cost: Optional[Decimal] = None,
    ) -> "FeeConfiguration":
        """Copy with per-order values set (None keeps the current value)."""
        update: Dict[str, Any] = {}
        if advertising_cost is not None:
            update["advertising_cost"] = advertising_cost
        if real_shipping_cost is not None:
            update["real_shipping_cost"] = real_shipping_cost
        if not update:
            return self
        return type(self).model_validate({**self.model_dump(), **update})
