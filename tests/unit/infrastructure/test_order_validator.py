"""
Tests for Tienda Nube order validation and normalization.
"""
import logging

import pytest
from pydantic import ValidationError

from nube_pnl.domain.enums import OrderStatus, PaymentStatus
from nube_pnl.infrastructure.adapters.tiendanube import (
    OrderValidationError,
    TiendaNubeOrder,
    check_transformable,
    safe_parse_order,
    validate_order,
)


class TestRequiredFields:
    """Test rejection of malformed payloads."""

    @pytest.mark.parametrize("missing", ["id", "number", "customer", "products"])
    def test_missing_required_field(self, order_payload, missing):
        """Each required field is reported when missing."""
        payload = order_payload()
        del payload[missing]

        with pytest.raises(OrderValidationError) as exc_info:
            validate_order(payload)

        locations = [issue.location for issue in exc_info.value.issues]
        assert missing in locations

    @pytest.mark.parametrize("field,value", [
        ("id", "1001"),
        ("number", "501"),
        ("id", 10.5),
    ])
    def test_identifiers_must_be_integers(self, order_payload, field, value):
        """id and number are strict integers."""
        with pytest.raises(OrderValidationError):
            validate_order(order_payload(**{field: value}))

    def test_customer_name_required(self, order_payload):
        """A customer object without a name is rejected."""
        payload = order_payload(customer={"id": 7, "email": "x@example.com"})

        with pytest.raises(OrderValidationError) as exc_info:
            validate_order(payload)

        assert exc_info.value.issues[0].location == "customer.name"
        assert exc_info.value.issues[0].kind == "missing"

    def test_product_quantity_required(self, order_payload):
        """Product lines need an integer quantity."""
        payload = order_payload(products=[{"name": "A", "price": "10"}])

        with pytest.raises(OrderValidationError) as exc_info:
            validate_order(payload)

        assert exc_info.value.issues[0].location == "products.0.quantity"

    def test_error_is_value_error(self, order_payload):
        """OrderValidationError is a ValueError carrying the order id."""
        payload = order_payload()
        del payload["customer"]

        with pytest.raises(ValueError) as exc_info:
            validate_order(payload)

        assert exc_info.value.order_ref == 1001
        assert "Invalid order 1001" in str(exc_info.value)

    @pytest.mark.parametrize("payload", [None, "order", 42, []])
    def test_non_object_payload(self, payload):
        """Non-object payloads are rejected, not crashed on."""
        with pytest.raises(OrderValidationError) as exc_info:
            validate_order(payload)

        assert exc_info.value.order_ref is None
        assert exc_info.value.issues

    def test_empty_products_allowed(self, order_payload):
        """An empty product list is valid."""
        order = validate_order(order_payload(products=[]))
        assert order.products == []


class TestNormalization:
    """Test defaulting of optional fields."""

    def test_minimal_payload(self):
        """A payload with only required fields gets every default."""
        order = validate_order({
            "id": 1,
            "number": 2,
            "customer": {"name": "Ana"},
            "products": [{"quantity": 1}],
        })

        assert order.status == OrderStatus.OPEN
        assert order.payment_status == PaymentStatus.PENDING
        assert order.total == "0"
        assert order.subtotal == "0"
        assert order.total_usd == "0"
        assert order.discount == "0"
        assert order.shipping == "0"
        assert order.token == ""
        assert order.gateway == ""
        assert order.gateway_name == ""
        assert order.currency == "ARS"
        assert order.shipping_option == ""
        assert order.store_id == ""
        assert order.customer.email is None
        assert order.products[0].name == ""
        assert order.products[0].sku is None
        assert order.payments is None

    def test_subtotal_defaults_to_total(self):
        """subtotal and total_usd copy total when absent."""
        order = validate_order({
            "id": 1, "number": 2, "total": "500",
            "customer": {"name": "Ana"}, "products": [],
        })

        assert order.subtotal == "500"
        assert order.total_usd == "500"

    def test_gateway_name_copies_gateway(self, order_payload):
        """gateway_name defaults to the gateway."""
        payload = order_payload(gateway="mobbex")
        del payload["gateway_name"]

        assert validate_order(payload).gateway_name == "mobbex"

    def test_store_id_becomes_string(self, order_payload):
        """Numeric store ids are stringified."""
        assert validate_order(order_payload(store_id=12345)).store_id == "12345"

    @pytest.mark.parametrize("raw,expected", [
        ("open", OrderStatus.OPEN),
        ("CLOSED", OrderStatus.CLOSED),
        ("Cancelled", OrderStatus.CANCELLED),
        ("foo", OrderStatus.OPEN),
        (3, OrderStatus.OPEN),
        (None, OrderStatus.OPEN),
    ])
    def test_order_status(self, order_payload, raw, expected):
        """Order status is matched case-insensitively, unknown -> open."""
        assert validate_order(order_payload(status=raw)).status == expected

    @pytest.mark.parametrize("raw,expected", [
        ("paid", PaymentStatus.PAID),
        ("Authorized", PaymentStatus.AUTHORIZED),
        ("refunded", PaymentStatus.REFUNDED),
        ("bar", PaymentStatus.PENDING),
        (None, PaymentStatus.PENDING),
    ])
    def test_payment_status(self, order_payload, raw, expected):
        """Payment status is matched case-insensitively, unknown -> pending."""
        assert validate_order(order_payload(payment_status=raw)).payment_status == expected

    def test_unknown_status_logs_warning(self, order_payload, caplog):
        """Defaulted statuses are logged."""
        with caplog.at_level(logging.WARNING):
            validate_order(order_payload(status="foo"))

        assert "Unrecognized order status 'foo'" in caplog.text

    def test_payment_record_status(self, order_payload):
        """Unknown payment record statuses normalize to pending."""
        order = validate_order(order_payload(payments=[
            {"status": "PAID", "gateway_fee": "10"},
            {"status": "chargeback"},
        ]))

        assert [p.status for p in order.payments] == [PaymentStatus.PAID, PaymentStatus.PENDING]

    def test_payment_record_string_id(self, order_payload):
        """Opaque gateway ids do not fail the order."""
        order = validate_order(order_payload(payments=[
            {"id": "MP-88f2a1", "status": "paid", "gateway_fee": "10"},
            {"id": 42, "status": "paid"},
        ]))

        assert [p.id for p in order.payments] == ["MP-88f2a1", 42]

    def test_extra_keys_are_preserved(self, order_payload):
        """Undeclared keys stay reachable for the fee extractors."""
        order = validate_order(order_payload(store_commission="12", landing_url="/x"))

        assert order.raw_value("store_commission") == "12"
        assert order.raw_value("landing_url") == "/x"
        assert order.raw_value("tiendanube_fee") is None
        assert order.raw_value("total") == "1000.00"

    def test_already_validated_order_passes_through(self, make_order):
        """validate_order is idempotent on a validated order."""
        order = make_order()
        assert validate_order(order) is order

    def test_order_is_frozen(self, make_order):
        """Validated orders are immutable."""
        order = make_order()
        with pytest.raises(ValidationError):
            order.total = "5"

    def test_validation_is_deterministic(self, order_payload):
        """Validating the same payload twice gives equal orders."""
        payload = order_payload(status="foo", payment_status="bar")
        assert validate_order(payload) == validate_order(payload)


class TestSafeParseOrder:
    """Test the non-throwing validator."""

    def test_success(self, order_payload):
        """Valid payloads succeed with data."""
        result = safe_parse_order(order_payload())

        assert result.success is True
        assert isinstance(result.data, TiendaNubeOrder)
        assert result.error is None
        assert result.issues == []

    def test_failure(self, order_payload):
        """Invalid payloads fail with a structured error instead of raising."""
        payload = order_payload(number="not-a-number")
        del payload["customer"]

        result = safe_parse_order(payload)

        assert result.success is False
        assert result.data is None
        assert isinstance(result.error, OrderValidationError)
        assert {issue.location for issue in result.issues} == {"number", "customer"}

    def test_failure_is_logged(self, caplog):
        """Failures are logged as warnings."""
        with caplog.at_level(logging.WARNING):
            safe_parse_order({"id": 5})

        assert "Invalid order 5" in caplog.text


class TestCheckTransformable:
    """Test non-blocking data-quality warnings."""

    def test_complete_order_has_no_warnings(self, make_order):
        """A complete order produces no warnings."""
        assert check_transformable(make_order()) == []

    def test_invalid_total(self, make_order):
        """An unusable total is flagged."""
        assert "Order total is missing or invalid" in check_transformable(make_order(total="abc"))

    def test_empty_customer_name(self, make_order):
        """An empty customer name is flagged."""
        warnings = check_transformable(make_order(customer={"name": ""}))
        assert "Customer name is missing" in warnings

    def test_no_products(self, make_order):
        """An order without products is flagged."""
        assert "Order has no products" in check_transformable(make_order(products=[]))

    def test_product_problems(self, make_order):
        """Bad prices and quantities are flagged per line."""
        order = make_order(products=[
            {"name": "A", "quantity": 0, "price": "10"},
            {"name": "B", "quantity": 1, "price": "gratis"},
        ])

        warnings = check_transformable(order)

        assert warnings == [
            "Product 1 has invalid quantity",
            "Product 2 has invalid price",
        ]

    def test_total_is_still_usable_after_warnings(self, make_order):
        """Warnings never change the order."""
        order = make_order(total="abc")
        check_transformable(order)
        assert order.total == "abc"
