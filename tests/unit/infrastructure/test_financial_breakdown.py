"""
Tests for the per-order financial breakdown view.
"""
from decimal import Decimal

from nube_pnl.domain.value_objects import FinancialBreakdown
from nube_pnl.infrastructure.adapters.tiendanube import (
    FeeConfiguration,
    TiendaNubeSaleMapper,
    get_order_financial_breakdown,
)


class TestFinancialBreakdown:
    """Test the diagnostic breakdown of a single order."""

    def test_revenue_and_fees(self, make_order):
        """Breakdown fees match the Sale transformer."""
        order = make_order()

        breakdown = get_order_financial_breakdown(order)
        sale = TiendaNubeSaleMapper.to_sale(order)

        assert isinstance(breakdown, FinancialBreakdown)
        assert breakdown.gross_revenue == Decimal("1000.00")
        assert breakdown.subtotal == Decimal("950.00")
        assert breakdown.platform_fee == sale.platform_fee
        assert breakdown.payment_fee == sale.payment_fee
        assert breakdown.product_cost == sale.product_cost

    def test_config_is_applied(self, make_order):
        """Store configuration feeds the fee fallbacks."""
        breakdown = get_order_financial_breakdown(
            make_order(), FeeConfiguration(platform_fee_percentage=Decimal("10"))
        )

        assert breakdown.platform_fee == Decimal("100")

    def test_shipping_legs(self, make_order):
        """Customer vs owner shipping and their delta."""
        order = make_order(shipping_cost_customer="200", shipping_cost_owner="150.50")

        shipping = get_order_financial_breakdown(order).shipping

        assert shipping.customer == Decimal("200")
        assert shipping.owner == Decimal("150.50")
        assert shipping.delta == Decimal("49.50")

    def test_owner_shipping_falls_back_to_customer(self, make_order):
        """Unreported owner cost mirrors the customer charge, delta 0."""
        order = make_order(shipping_cost_customer="200")

        shipping = get_order_financial_breakdown(order).shipping

        assert shipping.owner == Decimal("200")
        assert shipping.delta == Decimal("0")

    def test_no_shipping(self, make_order):
        """No shipping fields -> zero legs."""
        shipping = get_order_financial_breakdown(make_order()).shipping

        assert shipping.customer == Decimal("0")
        assert shipping.owner == Decimal("0")

    def test_discounts(self, make_order):
        """Discount components are reported separately."""
        order = make_order(discount="100", discount_coupon="80", discount_gateway={"amount": "20"})

        discounts = get_order_financial_breakdown(order).discounts

        assert discounts.total == Decimal("100")
        assert discounts.coupon == Decimal("80")
        assert discounts.gateway == Decimal("20")

    def test_missing_discount_components(self, make_order):
        """Absent discount components are 0."""
        discounts = get_order_financial_breakdown(make_order()).discounts

        assert discounts.coupon == Decimal("0")
        assert discounts.gateway == Decimal("0")

    def test_no_payment_records(self, make_order):
        """payments is None when the order has no payment records."""
        breakdown = get_order_financial_breakdown(make_order())

        assert breakdown.payments is None
        assert breakdown.get_payment_fee_total() == Decimal("0")

    def test_empty_payment_records(self, make_order):
        """An empty record list is reported as an empty list."""
        breakdown = get_order_financial_breakdown(make_order(payments=[]))

        assert breakdown.payments == []

    def test_payment_detail(self, make_order):
        """Per-payment detail with absent values as 0."""
        order = make_order(payments=[
            {
                "id": 77,
                "status": "paid",
                "gateway": "mercadopago",
                "payment_method": "credit_card",
                "gateway_fee": "10",
                "installments_cost": "5",
                "transaction_amount": "1000",
                "net_amount": "985",
            },
            {"status": "weird"},
        ])

        breakdown = get_order_financial_breakdown(order)

        first, second = breakdown.payments
        assert first.payment_id == 77
        assert first.status == "paid"
        assert first.gateway == "mercadopago"
        assert first.method == "credit_card"
        assert first.gateway_fee == Decimal("10")
        assert first.installments_cost == Decimal("5")
        assert first.discount_gateway == Decimal("0")
        assert first.other_fee == Decimal("0")
        assert first.transaction_amount == Decimal("1000")
        assert first.net_amount == Decimal("985")
        assert first.explicit_fees == Decimal("15")

        assert second.payment_id is None
        assert second.status == "pending"
        assert second.gateway == ""
        assert second.method == ""
        assert second.explicit_fees == Decimal("0")

        assert breakdown.get_payment_fee_total() == Decimal("15")
        assert breakdown.payment_fee == Decimal("15")

    def test_order_is_not_mutated(self, make_order):
        """The breakdown is a read-only view."""
        order = make_order(shipping_cost_customer="200")
        snapshot = order.model_dump()

        get_order_financial_breakdown(order)

        assert order.model_dump() == snapshot
