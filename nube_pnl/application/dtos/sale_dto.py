"""Application DTOs for Sale persistence and display."""

from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nube_pnl.domain.entities import Sale, SaleProduct


class SaleProductDTO(BaseModel):
    """DTO for a sale product line."""

    id: str = Field(..., description="Tienda Nube product ID")
    name: str = Field(..., description="Product name")
    sku: str = Field(default="", description="Product SKU")
    quantity: int = Field(..., description="Quantity sold")
    price: Decimal = Field(..., description="Unit price")
    cost: Decimal = Field(..., description="Unit cost")
    total: Decimal = Field(..., description="price * quantity")

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_entity(cls, product: SaleProduct) -> "SaleProductDTO":
        return cls(
            id=product.id,
            name=product.name,
            sku=product.sku,
            quantity=product.quantity,
            price=product.price,
            cost=product.cost,
            total=product.total,
        )


class SaleDTO(BaseModel):
    """
    Persistence/display DTO for a Sale.

    Serializes with the camelCase keys the storage layer and dashboard
    read (``model_dump(by_alias=True)``). The platform fee keeps its
    historical ``tiendaNubeFee`` key.
    """

    id: str = Field(..., description="Generated sale ID")
    order_number: int = Field(..., description="Tienda Nube order number")
    date: str = Field(..., description="Order creation timestamp")
    customer_name: str = Field(..., description="Customer name")

    gross_revenue: Decimal = Field(..., description="Order total")
    platform_fee: Decimal = Field(..., alias="tiendaNubeFee", description="Tienda Nube commission")
    payment_fee: Decimal = Field(..., description="Payment gateway fee")
    shipping_cost: Decimal = Field(..., description="Shipping paid by the store")
    product_cost: Decimal = Field(..., description="Cost of goods")
    advertising_cost: Decimal = Field(..., description="Advertising share")

    net_revenue: Decimal = Field(..., description="Gross revenue minus all costs")
    net_margin: Decimal = Field(..., description="Net revenue as % of gross revenue")

    payment_method: str = Field(..., description="Gateway display name")
    shipping_method: str = Field(..., description="Shipping option")
    products: List[SaleProductDTO] = Field(default_factory=list, description="Product lines")

    currency: str = Field(..., description="Currency code")
    status: str = Field(..., description="paid | pending | cancelled")
    cost_sources: Dict[str, str] = Field(
        default_factory=dict, description="Cost category -> fallback step used"
    )

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_entity(cls, sale: Sale) -> "SaleDTO":
        """Build the DTO from a domain Sale."""
        return cls(
            id=sale.id,
            order_number=sale.order_number,
            date=sale.date,
            customer_name=sale.customer_name,
            gross_revenue=sale.gross_revenue,
            platform_fee=sale.platform_fee,
            payment_fee=sale.payment_fee,
            shipping_cost=sale.shipping_cost,
            product_cost=sale.product_cost,
            advertising_cost=sale.advertising_cost,
            net_revenue=sale.net_revenue,
            net_margin=sale.net_margin,
            payment_method=sale.payment_method,
            shipping_method=sale.shipping_method,
            products=[SaleProductDTO.from_entity(p) for p in sale.products],
            currency=sale.currency,
            status=sale.status.value,
            cost_sources={name: source.value for name, source in sale.cost_sources.items()},
        )
