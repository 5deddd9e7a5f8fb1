"""Application tests for PlaceOrder."""

import json

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from storefront.errors import UpstreamError
from storefront.identity.user.user import User
from storefront.ordering.order import Order
from storefront.ordering.placement import PlaceOrder


def _lines(product_id="64b7f0c2a1b2c3d4e5f60718", quantity=2):
    return json.dumps(
        [
            {
                "product_id": product_id,
                "name": "Teak Sofa",
                "image": "https://img.example.test/sofa.jpg",
                "unit_price": 500.0,
                "quantity": quantity,
                "variant": None,
            }
        ]
    )


def _place(**overrides):
    defaults = {
        "buyer_id": "user_2buyer",
        "account_email": "asha.rao@example.com",
        "account_first_name": "Asha",
        "account_last_name": "Rao",
        "items": _lines(),
        "subtotal": 1000.0,
        "shipping": 0.0,
        "total": 1000.0,
        "first_name": "Asha",
        "last_name": "Rao",
        "email": "asha.rao@example.com",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "state": "KA",
        "zip_code": "560001",
        "country": "India",
        "payment_method": "full-online",
    }
    defaults.update(overrides)
    return current_domain.process(PlaceOrder(**defaults), asynchronous=False)


def _order_count():
    return current_domain.repository_for(Order)._dao.query.all().total


class TestPlaceOrder:
    def test_persists_pending_order_with_gateway_handle(self):
        placed = _place()

        order = current_domain.repository_for(Order).get(placed.order.id)
        assert order.status == "pending"
        assert order.payment.status == "pending"
        assert order.payment.gateway_order_id == placed.gateway_order.gateway_order_id
        assert order.buyer_id == "user_2buyer"
        assert order.buyer_name == "Asha Rao"
        assert order.shipping_address.city == "Bengaluru"
        assert order.order_code.startswith("ORD-")

    def test_full_online_requests_total(self, gateway):
        _place()
        call = gateway.calls[0]
        assert call["amount"] == 100000
        assert call["currency"] == "INR"
        assert call["receipt"].startswith("receipt_order_")

    def test_cash_on_delivery_requests_quarter(self, gateway):
        placed = _place(payment_method="partial-cash-on-delivery")
        assert gateway.calls[0]["amount"] == 25000
        assert placed.gateway_order.amount == 25000

    def test_currency_from_environment(self, gateway, monkeypatch):
        monkeypatch.setenv("PAYMENT_CURRENCY", "USD")
        _place()
        assert gateway.calls[0]["currency"] == "USD"

    def test_creates_user_mirror_with_history(self):
        placed = _place()

        user = current_domain.repository_for(User).find_by_external_id("user_2buyer")
        assert user is not None
        assert user.email == "asha.rao@example.com"
        assert user.name == "Asha Rao"
        assert user.order_ids == [str(placed.order.id)]

    def test_appends_to_existing_history(self):
        first = _place()
        second = _place()

        user = current_domain.repository_for(User).find_by_external_id("user_2buyer")
        assert user.order_ids == [str(first.order.id), str(second.order.id)]


class TestPlaceOrderFailures:
    def test_gateway_failure_persists_nothing(self, gateway):
        gateway.configure(should_succeed=False, failure_reason="Bad credentials")

        with pytest.raises(UpstreamError) as exc:
            _place()
        assert exc.value.message == "Failed to create payment gateway order."
        assert _order_count() == 0
        assert current_domain.repository_for(User).find_by_external_id("user_2buyer") is None

    def test_unknown_payment_method(self, gateway):
        with pytest.raises(ValidationError):
            _place(payment_method="cheque")
        assert gateway.calls == []

    def test_empty_cart(self, gateway):
        with pytest.raises(ValidationError):
            _place(items=json.dumps([]))
        assert gateway.calls == []
        assert _order_count() == 0

    def test_missing_address_field(self, gateway):
        with pytest.raises(ValidationError):
            _place(city=None)
        assert gateway.calls == []
