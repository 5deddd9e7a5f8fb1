"""Tests for the payment gateway adapters and factory."""

import requests
from razorpay.errors import BadRequestError
from storefront.payments.gateway import get_gateway, reset_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.razorpay_adapter import RazorpayGateway


class TestFakeGateway:
    def test_success(self):
        result = FakeGateway().create_order(amount=25000, currency="INR", receipt="receipt_order_1")
        assert result.success is True
        assert result.gateway_order_id.startswith("order_")
        assert result.as_handle()["amount"] == 25000

    def test_configured_failure(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False, failure_reason="Down")
        result = gateway.create_order(amount=100, currency="INR", receipt="r")
        assert result.success is False
        assert result.failure_reason == "Down"


class TestRazorpayGateway:
    def test_opens_order_through_client(self, monkeypatch):
        gateway = RazorpayGateway("key_id", "key_secret")
        captured = {}

        def fake_create(data):
            captured.update(data)
            return {"id": "order_Rzp1", "amount": data["amount"], "currency": "INR", "status": "created"}

        monkeypatch.setattr(gateway.client.order, "create", fake_create)
        result = gateway.create_order(25000, "INR", "receipt_order_1")

        assert captured == {"amount": 25000, "currency": "INR", "receipt": "receipt_order_1"}
        assert result.success is True
        assert result.gateway_order_id == "order_Rzp1"
        assert result.gateway_status == "created"

    def test_client_uses_key_pair(self):
        gateway = RazorpayGateway("key_id", "key_secret")
        assert gateway.client.auth == ("key_id", "key_secret")

    def test_rejected_request_is_a_failed_result(self, monkeypatch):
        gateway = RazorpayGateway("key_id", "bad")

        def rejected(data):
            raise BadRequestError("Authentication failed")

        monkeypatch.setattr(gateway.client.order, "create", rejected)
        result = gateway.create_order(100, "INR", "r")
        assert result.success is False
        assert result.failure_reason == "Authentication failed"

    def test_network_error_is_a_failed_result(self, monkeypatch):
        gateway = RazorpayGateway("key_id", "key_secret")

        def unreachable(data):
            raise requests.ConnectionError("unreachable")

        monkeypatch.setattr(gateway.client.order, "create", unreachable)
        assert gateway.create_order(100, "INR", "r").success is False


class TestGatewayFactory:
    def test_razorpay_selected_by_environment(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_GATEWAY", "razorpay")
        reset_gateway()
        assert isinstance(get_gateway(), RazorpayGateway)

    def test_fake_by_default(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_GATEWAY", "fake")
        reset_gateway()
        assert isinstance(get_gateway(), FakeGateway)
