from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional

from pydantic import Field

from nube_pnl.settings.base import NubeBaseSettings


class FeeSettings(NubeBaseSettings):
    """
    Store fee defaults.
    Loaded from environment / .env with exact variable name matching.

    GATEWAY_FEE_OVERRIDES is a JSON object, e.g. '{"mercadopago": 6.29}'.
    """

    # Tienda Nube commission (% of gross revenue)
    platform_fee_percentage: Decimal = Field(
        default=Decimal("5.31"), ge=0, le=100, alias="PLATFORM_FEE_PERCENTAGE"
    )

    # Gateway name -> fee percentage
    gateway_fee_overrides: Dict[str, Decimal] = Field(
        default_factory=dict, alias="GATEWAY_FEE_OVERRIDES"
    )

    # Advertising cost charged to every order when no spend is allocated
    default_advertising_cost: Optional[Decimal] = Field(
        default=None, ge=0, alias="DEFAULT_ADVERTISING_COST"
    )
