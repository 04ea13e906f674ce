"""Shared fixtures: minimal Tienda Nube order payloads."""
import copy

import pytest

from nube_pnl.infrastructure.adapters.tiendanube import validate_order


BASE_ORDER = {
    "id": 1001,
    "number": 501,
    "store_id": 12345,
    "created_at": "2024-03-01T10:00:00-03:00",
    "status": "open",
    "payment_status": "paid",
    "currency": "ARS",
    "total": "1000.00",
    "subtotal": "950.00",
    "discount": "0",
    "shipping": "50.00",
    "shipping_option": "Correo Argentino",
    "gateway": "mercadopago",
    "gateway_name": "Mercado Pago",
    "customer": {"id": 7, "name": "Juana Perez", "email": "juana@example.com"},
    "products": [
        {
            "id": 11,
            "product_id": 900,
            "name": "Remera",
            "sku": "REM-01",
            "quantity": 2,
            "price": "475.00",
            "cost": "200.00",
        }
    ],
}


@pytest.fixture
def order_payload():
    """Factory for raw payloads; keyword overrides replace top-level keys."""
    def _build(**overrides):
        payload = copy.deepcopy(BASE_ORDER)
        payload.update(overrides)
        return payload
    return _build


@pytest.fixture
def make_order(order_payload):
    """Factory for validated orders."""
    def _build(**overrides):
        return validate_order(order_payload(**overrides))
    return _build
